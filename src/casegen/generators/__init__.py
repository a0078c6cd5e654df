"""
Generators Package - phase generators for the demo tenant.

Base Classes:
- GenerationContext: Shared state dataclass passed to all generators
- BasePhaseGenerator: Abstract base class for phase generators

Core Phases (failures abort the run):
- TaxonomyGenerator: Category tree
- LocationGenerator: Office locations
- OrganizationGenerator: Divisions, business units, departments, teams
- EmployeeGenerator: Named personas, structural leads, bulk workforce
- PatternPoolGenerator: Repeat-subject, hotspot and flagship pools
- IntakeGenerator: Intake records
- CaseGenerator: Flagship and regular cases, intake associations
- RetaliationGenerator: Retaliation follow-up chains
- InvestigationGenerator: Investigations

Terminal Phases (failures are logged and skipped):
- CampaignGenerator, WorkflowGenerator, NotificationGenerator,
  SavedViewGenerator, AiConversationGenerator, ReportGenerator,
  ActivityGenerator
"""

from .activity import ActivityGenerator
from .base import BasePhaseGenerator, GenerationContext
from .cases import CaseGenerator
from .downstream import (
    AiConversationGenerator,
    CampaignGenerator,
    NotificationGenerator,
    ReportGenerator,
    SavedViewGenerator,
    WorkflowGenerator,
)
from .intake import IntakeGenerator
from .investigations import InvestigationGenerator
from .organization import EmployeeGenerator, LocationGenerator, OrganizationGenerator
from .patterns import PatternPoolGenerator
from .retaliation import RetaliationGenerator
from .taxonomy import TaxonomyGenerator

__all__ = [
    # Base classes
    "GenerationContext",
    "BasePhaseGenerator",
    # Reference data
    "TaxonomyGenerator",
    "LocationGenerator",
    "OrganizationGenerator",
    "EmployeeGenerator",
    "PatternPoolGenerator",
    # Core records
    "IntakeGenerator",
    "CaseGenerator",
    "RetaliationGenerator",
    "InvestigationGenerator",
    # Downstream attachers
    "CampaignGenerator",
    "WorkflowGenerator",
    "NotificationGenerator",
    "SavedViewGenerator",
    "AiConversationGenerator",
    "ReportGenerator",
    "ActivityGenerator",
]
