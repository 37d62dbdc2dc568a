"""
Preprocessing filters.

    center.py     - Center, ResponseCenter
    glsw.py       - GLSW, EPO (replicate predictor matrices)
    ygradient.py  - YGradientGLSW, YGradientEPO (predictors + response)
"""

from spectrafilter.filters.center import Center, ResponseCenter
from spectrafilter.filters.glsw import EPO, GLSW
from spectrafilter.filters.ygradient import YGradientEPO, YGradientGLSW, first_derivative

__all__ = [
    'Center',
    'ResponseCenter',
    'GLSW',
    'EPO',
    'YGradientGLSW',
    'YGradientEPO',
    'first_derivative',
]
