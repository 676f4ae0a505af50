from __future__ import annotations

from .actions import ActionsAPI
from .admin import AdminAPI
from .issues import IssueAPI
from .pulls import PullRequestAPI
from .repos import RepositoryAPI
from .users import UserAPI

__all__ = [
    "ActionsAPI",
    "AdminAPI",
    "IssueAPI",
    "PullRequestAPI",
    "RepositoryAPI",
    "UserAPI",
]
