"""
Igor Installation Wizard

Message-driven state machine and views for the NVIDIA driver installer.
"""

from igor.wizard.orchestrator import WizardOrchestrator
from igor.wizard.states import ViewState
from igor.wizard.ui import Styles

__all__ = ["WizardOrchestrator", "ViewState", "Styles"]
