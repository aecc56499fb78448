"""Paytable helpers shared by the table-driven games"""
from typing import Sequence

import numpy as np


def expected_return(multipliers: Sequence[float], probabilities: Sequence[float]) -> float:
    """RTP of a paytable: sum of P[i] * multiplier[i]"""
    return float(np.dot(np.asarray(probabilities, dtype=float), np.asarray(multipliers, dtype=float)))


def scale_to_rtp(multipliers: Sequence[float], probabilities: Sequence[float],
                 target_rtp: float) -> list:
    """Rescale a paytable so its expected return equals `target_rtp`"""
    raw = expected_return(multipliers, probabilities)
    if raw <= 0:
        raise ValueError("Paytable has no positive return to scale")
    return (np.asarray(multipliers, dtype=float) * (target_rtp / raw)).tolist()
