"""05 - Edit and vary a local image.

Usage: python 05_edit_image.py image.png [mask.png]
"""

import sys

from aionic import ImageClient

image = sys.argv[1]
mask = sys.argv[2] if len(sys.argv) > 2 else None

client = ImageClient()
print("Edit:", client.edit("Add a small red hat", image, mask))
print("Variation:", client.variation(image))
