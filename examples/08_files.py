"""08 - Upload, list, read and delete training files.

Usage: python 08_files.py train.jsonl
"""

import sys

from aionic import FilesClient

client = FilesClient()

uploaded = client.upload(sys.argv[1])
print(f"Uploaded {uploaded.filename} as {uploaded.id} ({uploaded.bytes} bytes)")

for f in client.list().data:
    print(f"  {f.id}  {f.purpose:<12} {f.filename}")

for record in client.retrieve_content(uploaded.id)[:3]:
    print(f"  prompt={record.prompt!r} completion={record.completion!r}")

print("Deleted:", client.delete(uploaded.id).deleted)
