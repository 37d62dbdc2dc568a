"""Independent component analysis and its negative-entropy approximations."""

from spectrafilter.ica.approxfun import (
    ApproximationResult,
    Cube,
    Exponential,
    LogCosH,
    NegEntropyApproximation,
)
from spectrafilter.ica.fastica import FastICA, ICAAlgorithm

__all__ = [
    'ApproximationResult',
    'NegEntropyApproximation',
    'Cube',
    'Exponential',
    'LogCosH',
    'FastICA',
    'ICAAlgorithm',
]
