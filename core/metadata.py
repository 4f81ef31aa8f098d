"""
Portfolio Terminal Metadata
---------------------------
Project identity shared by the backend (FastAPI title/version) and the
Streamlit shell (page title, footer).
"""

from core import config
from core.portfolio import OWNER_NAME, OWNER_TITLE

__project__ = "Portfolio Terminal"
__version__ = config.BACKEND_VERSION
__maintainer__ = OWNER_NAME

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "maintainer": __maintainer__,
    "title": OWNER_TITLE,
    "description": (
        "Terminal-style personal portfolio: a command interpreter over an "
        "editable portfolio record, with a visitor profile view."
    ),
}


def get_metadata() -> dict:
    """Return project metadata as a dict."""
    return dict(CORE_METADATA)
