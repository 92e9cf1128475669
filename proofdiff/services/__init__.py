"""Services module - Business logic layer"""

from .annotator import anchor, category_style, display_order, highlight_class, preview, reconstruct
from .config_manager import ConfigManager
from .corrections import parse_corrections
from .diff_generator import DiffGenerator, align, compare, diff, mask_deleted
from .fix_applier import FixStrategy, apply_fixes
from .session import ProofreadingSession, SessionStore

__all__ = [
    "align",
    "anchor",
    "apply_fixes",
    "category_style",
    "compare",
    "ConfigManager",
    "diff",
    "DiffGenerator",
    "display_order",
    "FixStrategy",
    "highlight_class",
    "mask_deleted",
    "parse_corrections",
    "preview",
    "ProofreadingSession",
    "reconstruct",
    "SessionStore",
]
