import sys
import warnings
from pathlib import Path

# Ignore warnings from the Azure SDK
warnings.filterwarnings("ignore", category=DeprecationWarning, module="azure.*")

# Ensure the project root is on sys.path so `livecast` and `tests` resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Import media service fixtures so they are available to all tests
from tests.fixtures.media_fixtures import *  # noqa: E402, F403
