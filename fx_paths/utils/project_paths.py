# fx_paths/utils/project_paths.py
from pathlib import Path

# Resolve the project root: fx_paths/ (the package root)
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Common directories
CONFIG_DIR = PROJECT_ROOT / "config"
LOGS_DIR = PROJECT_ROOT / "logs"  # created on first get_logger() call
