"""Preview environment deploy and teardown.

Components:
- naming: release names, URLs, version tags and the teardown pattern
- deployer: build, package, publish and install a preview
- cleaner: uninstall previews and delete their chart versions
"""

from .cleaner import ClearResult, PreviewCleaner
from .constants import PreviewConstants
from .deployer import DeployResult, PreviewDeployer
from .naming import PreviewNames, PreviewVersions, generate_hash, version_pattern

__all__ = [
    "PreviewDeployer",
    "PreviewCleaner",
    "DeployResult",
    "ClearResult",
    "PreviewConstants",
    "PreviewNames",
    "PreviewVersions",
    "generate_hash",
    "version_pattern",
]
