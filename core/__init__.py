"""
Core Dispatch Components.

Pure data structures shared by the trigger and infrastructure layers.

Structure:
    models/: Delivery metadata, credential header, orchestration result
"""

from . import models
