"""09 - Start and inspect a fine-tune job.

Usage: python 09_fine_tune.py file-abc123
"""

import sys

from aionic import FineTuneClient

client = FineTuneClient().set_model("curie")

job = client.create(sys.argv[1])
print(f"Created {job.id}: {job.status}")

for event in client.list_events(job.id).data:
    print(f"  [{event.level}] {event.message}")

print("Cancelled:", client.cancel(job.id).status)
