"""Concrete collaborators: region table and dry-run submission client."""

from property_wizard.infrastructure.regions import StaticRegionDirectory
from property_wizard.infrastructure.submission_client import DryRunSubmissionClient

__all__ = ["DryRunSubmissionClient", "StaticRegionDirectory"]
