"""
Shared test infrastructure for Link Tag Helper.

Modules:
- file_utils: files, web roots, directory timestamps
- cli_utils: running the CLI in a subprocess
- stubs: collaborator doubles for tag helpers
- helper_utils: binding and processing a single element
"""

from .file_utils import write, make_web_root, touch_dir
from .cli_utils import run_cli, jload
from .stubs import RecordingUrlBuilder
from .helper_utils import run_helper

__all__ = ["write", "make_web_root", "touch_dir", "run_cli", "jload", "RecordingUrlBuilder", "run_helper"]
