"""Clone selection domain package."""

from .models import Account, CloneRequest, Repository
from .paths import AutoSuffix, infer_clone_path
from .service import DESTINATION_ALREADY_EXISTS, CloneService, LocalCloneService

__all__ = [
    "Account",
    "AutoSuffix",
    "CloneRequest",
    "CloneService",
    "DESTINATION_ALREADY_EXISTS",
    "infer_clone_path",
    "LocalCloneService",
    "Repository",
]
