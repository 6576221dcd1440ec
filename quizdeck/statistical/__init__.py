"""Statistical checks for quizdeck."""

from .uniformity import (
    UniformityReport,
    audit_question_bank,
    audit_shuffle_uniformity,
    chi2_sf,
    chi_square_test,
    correct_position_counts,
)

__all__ = [
    "UniformityReport",
    "audit_question_bank",
    "audit_shuffle_uniformity",
    "chi2_sf",
    "chi_square_test",
    "correct_position_counts",
]
