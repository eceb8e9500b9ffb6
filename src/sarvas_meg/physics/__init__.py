"""
Physics Module

Contains the Sarvas analytic MEG solver, dipole records, 3-vector
helpers and physical constants.
"""

from .constants import *
from .coordinates import as_coordinate
from .dipole import Dipole
from .analytic_meg import AnalyticSolutionMEG
