"""
Multi-Arm Detector

Groups comparisons by study and reports every study that contributes more
than two distinct treatments. Such trials induce correlation between their
pairwise comparisons; this module only surfaces the condition and does not
adjust any variance.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from treatment_network.core.models import TreatmentComparison, MultiArmTrial

logger = logging.getLogger(__name__)


def detect_multi_arm_trials(comparisons: Iterable[TreatmentComparison]) -> List[MultiArmTrial]:
    """Return multi-arm trials in first-seen study order."""
    # dict keys keep insertion order, used here as an ordered set
    study_treatments: Dict[str, Dict[str, None]] = {}

    for comp in comparisons:
        arms = study_treatments.setdefault(comp.study_id, {})
        arms[comp.treatment_a] = None
        arms[comp.treatment_b] = None

    trials = [
        MultiArmTrial(study_id=study_id, treatments=list(arms))
        for study_id, arms in study_treatments.items()
        if len(arms) > 2
    ]

    if trials:
        logger.debug(
            "Detected %d multi-arm trial(s): %s",
            len(trials), ", ".join(t.study_id for t in trials),
        )
    return trials
