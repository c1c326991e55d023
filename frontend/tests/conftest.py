import sys
from pathlib import Path

# Ensure the frontend package root is on sys.path for direct pytest runs
FRONTEND_ROOT = Path(__file__).resolve().parents[1]
if str(FRONTEND_ROOT) not in sys.path:
    sys.path.insert(0, str(FRONTEND_ROOT))
