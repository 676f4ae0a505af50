from __future__ import annotations

import re
from typing import Dict, Mapping

Table = Dict[str, Dict[str, str]]

PLACEHOLDER = re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}")

EN: Table = {
    "common": {
        "server_description": "GitHub Enterprise MCP server exposing repositories, pull requests, issues, workflows and user administration.",
        "error_required": "{field} is required.",
        "error_generic": "An error occurred: {message}",
        "error_action": "An error occurred while {action}: {message}",
        "enterprise_only": "{feature} is only available in GitHub Enterprise. This operation cannot be performed on GitHub.com.",
        "server_start": "GitHub Enterprise MCP server started ({transport} transport)",
        "server_start_http": "HTTP server running at http://{host}:{port}",
        "api_url": "GitHub API URL: {url}",
        "server_shutdown": "Shutting down server...",
        "port_in_use": "Port {port} is already in use, trying {next_port}...",
    },
    "repos": {
        "no_description": "No description",
        "repo_list_title": "{type} '{name}' repositories ({count})",
        "org_type": "Organization",
        "user_type": "User",
        "repo_list_empty": "No repositories found for '{owner}'.",
        "repo_detail_title": "Repository '{owner}/{repo}' details",
        "branch_list_title": "Branches in repository '{owner}/{repo}' ({count}){filter}",
        "protected_branches_only": ", protected only",
        "branch_list_empty": "No branches found in repository '{owner}/{repo}'.",
        "content_title": "{type} '{path}' ({count} item(s))",
        "directory_type": "Directory",
        "file_type": "File",
        "decode_failed": "Unable to decode file content.",
        "repo_created": "Successfully created repository: {full_name}",
        "repo_updated": "Successfully updated repository: {full_name}",
        "repo_deleted": "Successfully deleted repository: {owner}/{repo}",
        "delete_confirm_required": "You must set 'confirm' to true to delete a repository. This action is irreversible.",
    },
    "pulls": {
        "pr_list_title": "Pull requests in repository '{owner}/{repo}' ({count})",
        "pr_list_empty": "No pull requests found in repository '{owner}/{repo}' with state '{state}'.",
        "pr_detail_title": "Pull request #{number} details",
        "pr_created": "Successfully created pull request #{number}: \"{title}\"",
        "pr_updated": "Successfully updated pull request #{number}: \"{title}\"",
        "pr_merged": "Successfully merged pull request #{number}.\nResult: {message}\nCommit SHA: {sha}",
    },
    "issues": {
        "issue_list_title": "Issues in repository '{owner}/{repo}' ({count})",
        "issue_list_empty": "No issues found in repository '{owner}/{repo}' with state '{state}'.",
        "issue_detail_title": "Issue #{number} details",
        "issue_created": "Successfully created issue #{number}: \"{title}\"",
        "issue_updated": "Successfully updated issue #{number}: \"{title}\"",
        "comment_list_title": "Comments on issue #{number} ({count})",
        "comment_list_empty": "No comments found on issue #{number}.",
        "comment_created": "Successfully added a comment to issue #{number}",
    },
    "actions": {
        "workflow_list_title": "Workflows in repository '{owner}/{repo}' ({count})",
        "workflow_list_empty": "No workflows found in repository '{owner}/{repo}'.",
        "run_list_title": "{scope} runs in repository '{owner}/{repo}' ({count})",
        "run_list_scope_workflow": "Workflow '{workflow}'",
        "run_list_scope_all": "Workflow",
        "run_list_empty": "No workflow runs found in repository '{owner}/{repo}'.",
        "run_list_empty_workflow": "No workflow runs found for workflow '{workflow}' in repository '{owner}/{repo}'.",
        "run_detail_title": "Workflow run #{run_id} details",
        "workflow_triggered": "Successfully triggered workflow '{workflow}' in repository '{owner}/{repo}' on ref '{ref}'.",
        "run_rerun": "Re-run requested for workflow run #{run_id} in repository '{owner}/{repo}'.",
        "run_cancelled": "Cancellation requested for workflow run #{run_id} in repository '{owner}/{repo}'.",
        "run_logs_title": "Log archive for workflow run #{run_id} in repository '{owner}/{repo}'",
        "run_logs_missing": "No log archive is available for workflow run #{run_id}.",
    },
    "admin": {
        "license_info_title": "GitHub Enterprise license information",
        "stats_title": "GitHub Enterprise statistics",
        "stats_kind_title": "GitHub Enterprise statistics ({kind})",
    },
    "users": {
        "user_list_title": "GitHub Enterprise users ({count})",
        "user_detail_title": "User details for '{username}'",
        "user_created": "User '{username}' successfully created",
        "user_updated": "User '{username}' successfully updated",
        "user_deleted": "User '{username}' has been successfully deleted.",
        "user_suspended": "User '{username}' has been suspended.",
        "suspend_reason": " Reason: {reason}",
        "user_unsuspended": "User '{username}' has been unsuspended.",
        "user_orgs_title": "Organizations for user '{username}' ({count})",
        "user_orgs_empty": "User '{username}' does not belong to any organizations.",
        "user_list_empty": "No users found.",
    },
}

KO: Table = {
    "common": {
        "server_description": "저장소, 풀 리퀘스트, 이슈, 워크플로우, 사용자 관리를 제공하는 GitHub Enterprise MCP 서버입니다.",
        "error_required": "{field} 항목은 필수입니다.",
        "error_generic": "오류가 발생했습니다: {message}",
        "error_action": "{action} 중 오류가 발생했습니다: {message}",
        "enterprise_only": "{feature} 기능은 GitHub Enterprise에서만 사용할 수 있습니다. GitHub.com에서는 수행할 수 없습니다.",
        "server_start": "GitHub Enterprise MCP 서버가 시작되었습니다 ({transport} 전송)",
        "server_start_http": "HTTP 서버 실행 중: http://{host}:{port}",
        "api_url": "GitHub API URL: {url}",
        "server_shutdown": "서버를 종료합니다...",
        "port_in_use": "포트 {port}가 이미 사용 중입니다. {next_port} 포트를 시도합니다...",
    },
    "repos": {
        "no_description": "설명 없음",
        "repo_list_title": "{type} '{name}'의 저장소 ({count}개)",
        "org_type": "조직",
        "user_type": "사용자",
        "repo_list_empty": "'{owner}'의 저장소를 찾을 수 없습니다.",
        "repo_detail_title": "저장소 '{owner}/{repo}' 상세 정보",
        "branch_list_empty": "저장소 '{owner}/{repo}'에서 브랜치를 찾을 수 없습니다.",
        "directory_type": "디렉토리",
        "file_type": "파일",
        "decode_failed": "파일 내용을 디코딩할 수 없습니다.",
    },
    "issues": {
        "issue_list_title": "저장소 '{owner}/{repo}'의 이슈 ({count}개)",
        "issue_detail_title": "이슈 #{number} 상세 정보",
    },
    "admin": {
        "license_info_title": "GitHub Enterprise 라이선스 정보",
        "stats_title": "GitHub Enterprise 통계",
    },
}

TABLES: Dict[str, Table] = {"en": EN, "ko": KO}


class Strings:
    """Namespaced message lookup; missing entries fall back to English, then to the key."""

    def __init__(self, language: str = "en") -> None:
        self.language = language if language in TABLES else "en"

    def t(self, namespace: str, key: str, **params: object) -> str:
        text = TABLES[self.language].get(namespace, {}).get(key)
        if text is None:
            text = EN.get(namespace, {}).get(key, key)
        if not params:
            return text
        return _interpolate(text, params)


def _interpolate(text: str, params: Mapping[str, object]) -> str:
    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER.sub(_sub, text)
