"""Compact projections of GitHub API payloads used in tool output."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List

from .strings import Strings

ISSUE_PREVIEW_CHARS = 100


def _login(user: Dict[str, Any] | None) -> str | None:
    return (user or {}).get("login")


def _full_name(ref: Dict[str, Any]) -> str | None:
    return (ref.get("repo") or {}).get("full_name")


def format_repository(repo: Dict[str, Any], strings: Strings) -> Dict[str, Any]:
    owner = repo.get("owner") or {}
    license_info = repo.get("license")
    return {
        "id": repo.get("id"),
        "name": repo.get("name"),
        "full_name": repo.get("full_name"),
        "private": repo.get("private"),
        "description": repo.get("description") or strings.t("repos", "no_description"),
        "html_url": repo.get("html_url"),
        "created_at": repo.get("created_at"),
        "updated_at": repo.get("updated_at"),
        "pushed_at": repo.get("pushed_at"),
        "language": repo.get("language"),
        "default_branch": repo.get("default_branch"),
        "stargazers_count": repo.get("stargazers_count"),
        "forks_count": repo.get("forks_count"),
        "watchers_count": repo.get("watchers_count"),
        "open_issues_count": repo.get("open_issues_count"),
        "license": license_info.get("name") if license_info else None,
        "owner": {
            "login": owner.get("login"),
            "id": owner.get("id"),
            "avatar_url": owner.get("avatar_url"),
            "html_url": owner.get("html_url"),
            "type": owner.get("type"),
        },
    }


def format_branch(branch: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": branch.get("name"),
        "commit": {"sha": (branch.get("commit") or {}).get("sha")},
        "protected": branch.get("protected"),
    }


def _content_entry(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": item.get("name"),
        "path": item.get("path"),
        "type": item.get("type"),
        "size": item.get("size"),
        "url": item.get("html_url"),
    }


def format_content(content: Any, strings: Strings) -> Any:
    """Directory listings become entry lists; files get their base64 body decoded."""

    if isinstance(content, list):
        return [_content_entry(item) for item in content]
    result = _content_entry(content)
    if content.get("content") and content.get("encoding") == "base64":
        try:
            result["content"] = base64.b64decode(content["content"]).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            result["content"] = strings.t("repos", "decode_failed")
    return result


def format_pull_request_summary(pr: Dict[str, Any]) -> Dict[str, Any]:
    head = pr.get("head") or {}
    base = pr.get("base") or {}
    return {
        "number": pr.get("number"),
        "title": pr.get("title"),
        "state": pr.get("state"),
        "user": _login(pr.get("user")),
        "created_at": pr.get("created_at"),
        "updated_at": pr.get("updated_at"),
        "head": f"{_full_name(head)}:{head.get('ref')}",
        "base": f"{_full_name(base)}:{base.get('ref')}",
        "url": pr.get("html_url"),
    }


def format_pull_request(pr: Dict[str, Any]) -> Dict[str, Any]:
    head = pr.get("head") or {}
    base = pr.get("base") or {}
    return {
        "number": pr.get("number"),
        "title": pr.get("title"),
        "body": pr.get("body"),
        "state": pr.get("state"),
        "user": _login(pr.get("user")),
        "created_at": pr.get("created_at"),
        "updated_at": pr.get("updated_at"),
        "closed_at": pr.get("closed_at"),
        "merged_at": pr.get("merged_at"),
        "head": {"ref": head.get("ref"), "sha": head.get("sha"), "repo": _full_name(head)},
        "base": {"ref": base.get("ref"), "sha": base.get("sha"), "repo": _full_name(base)},
        "merged": pr.get("merged"),
        "mergeable": pr.get("mergeable"),
        "comments": pr.get("comments"),
        "commits": pr.get("commits"),
        "additions": pr.get("additions"),
        "deletions": pr.get("deletions"),
        "changed_files": pr.get("changed_files"),
        "url": pr.get("html_url"),
    }


def _label_names(issue: Dict[str, Any]) -> List[str]:
    names = []
    for label in issue.get("labels") or []:
        # labels may come back as plain strings on some endpoints
        names.append(label.get("name") if isinstance(label, dict) else str(label))
    return names


def _assignee_logins(issue: Dict[str, Any]) -> List[str]:
    return [assignee.get("login") for assignee in issue.get("assignees") or []]


def _preview(body: str | None) -> str:
    if not body:
        return ""
    if len(body) > ISSUE_PREVIEW_CHARS:
        return body[:ISSUE_PREVIEW_CHARS] + "..."
    return body


def format_issue_summary(issue: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "number": issue.get("number"),
        "title": issue.get("title"),
        "state": issue.get("state"),
        "user": _login(issue.get("user")),
        "created_at": issue.get("created_at"),
        "updated_at": issue.get("updated_at"),
        "body": _preview(issue.get("body")),
        "comments": issue.get("comments"),
        "labels": _label_names(issue),
        "assignees": _assignee_logins(issue),
    }


def format_issue(issue: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "number": issue.get("number"),
        "title": issue.get("title"),
        "body": issue.get("body"),
        "state": issue.get("state"),
        "user": _login(issue.get("user")),
        "created_at": issue.get("created_at"),
        "updated_at": issue.get("updated_at"),
        "closed_at": issue.get("closed_at"),
        "comments": issue.get("comments"),
        "labels": _label_names(issue),
        "assignees": _assignee_logins(issue),
    }


def format_comment(comment: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": comment.get("id"),
        "user": _login(comment.get("user")),
        "body": comment.get("body"),
        "created_at": comment.get("created_at"),
        "updated_at": comment.get("updated_at"),
        "url": comment.get("html_url"),
    }


def format_workflow(workflow: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": workflow.get("id"),
        "name": workflow.get("name"),
        "path": workflow.get("path"),
        "state": workflow.get("state"),
        "created_at": workflow.get("created_at"),
        "updated_at": workflow.get("updated_at"),
        "url": workflow.get("html_url"),
        "badge_url": workflow.get("badge_url"),
    }


def format_workflow_run(run: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": run.get("id"),
        "name": run.get("name"),
        "workflow_id": run.get("workflow_id"),
        "run_number": run.get("run_number"),
        "event": run.get("event"),
        "status": run.get("status"),
        "conclusion": run.get("conclusion"),
        "created_at": run.get("created_at"),
        "updated_at": run.get("updated_at"),
        "url": run.get("html_url"),
        "head_branch": run.get("head_branch"),
        "head_sha": run.get("head_sha"),
        "run_attempt": run.get("run_attempt"),
    }


def format_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "login": user.get("login"),
        "id": user.get("id"),
        "name": user.get("name"),
        "email": user.get("email"),
        "type": user.get("type"),
        "site_admin": user.get("site_admin"),
        "suspended_at": user.get("suspended_at"),
        "created_at": user.get("created_at"),
        "url": user.get("html_url"),
    }


def format_organization(org: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "login": org.get("login"),
        "id": org.get("id"),
        "description": org.get("description"),
        "url": org.get("url"),
    }
