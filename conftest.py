# Make the service and the shared package importable without an install,
# the same way the containers lay them out on PYTHONPATH.
import os
import sys

ROOT = os.path.dirname(__file__)

for p in (
    os.path.join(ROOT, "services", "docs_proxy"),
    os.path.join(ROOT, "shared"),
):
    if p not in sys.path:
        sys.path.insert(0, p)
