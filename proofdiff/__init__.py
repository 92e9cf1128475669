"""Character-level text diffing and proofreading annotation"""

from proofdiff.services.annotator import anchor, reconstruct
from proofdiff.services.diff_generator import align, diff
from proofdiff.services.fix_applier import FixStrategy, apply_fixes

__all__ = ["align", "anchor", "apply_fixes", "diff", "FixStrategy", "reconstruct"]
