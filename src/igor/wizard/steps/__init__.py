"""
Igor Wizard Steps

One view per wizard step.
"""

from igor.wizard.steps.base import StepView
from igor.wizard.steps.complete import CompleteView
from igor.wizard.steps.confirmation import ConfirmationView
from igor.wizard.steps.detection import DetectionView
from igor.wizard.steps.error import ErrorView
from igor.wizard.steps.installing import InstallingView
from igor.wizard.steps.selection import SelectionView
from igor.wizard.steps.system_info import SystemInfoView
from igor.wizard.steps.welcome import WelcomeView

__all__ = [
    "StepView", "WelcomeView", "DetectionView", "SystemInfoView", "SelectionView",
    "ConfirmationView", "InstallingView", "CompleteView", "ErrorView",
]
