"""FastMCP tool registrations for the GitHub Enterprise server.

Every tool follows the same shape: check required strings, call one
operation wrapper, project the payload with :mod:`ghe_lib.formatting` and
return ``"<title>\\n\\n<json>"``. Upstream failures surface as ``ToolError``,
which FastMCP reports to the client as an ``isError`` tool result.
"""

# Annotations stay evaluated at definition time: FastMCP builds argument
# schemas from the live signature of the nested tool functions below.

import functools
import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable, Dict, List, Literal

import httpx
from mcp.server import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from . import formatting
from .api import ActionsAPI, AdminAPI, IssueAPI, PullRequestAPI, RepositoryAPI, UserAPI
from .client import GitHubClient, GitHubError, without_none
from .config import Config
from .strings import Strings

LOGGER = logging.getLogger("ghe.tools")

SERVER_NAME = "GitHub Enterprise MCP"

Owner = Annotated[str, Field(description="Repository owner (user or organization)")]
Repo = Annotated[str, Field(description="Repository name")]
Page = Annotated[int, Field(description="Page number", ge=1)]
PerPage = Annotated[int, Field(description="Items per page (max 100)", ge=1, le=100)]
OptionalPage = Annotated[int | None, Field(description="Page number", ge=1)]
OptionalPerPage = Annotated[int | None, Field(description="Items per page (max 100)", ge=1, le=100)]
PullNumber = Annotated[int, Field(description="Pull request number")]
IssueNumber = Annotated[int, Field(description="Issue number")]
RunId = Annotated[int, Field(description="Workflow run ID")]
WorkflowId = Annotated[int | str, Field(description="Workflow ID or workflow file name (e.g. 'ci.yml')")]
Username = Annotated[str, Field(description="Username of the target user")]
Direction = Annotated[Literal["asc", "desc"], Field(description="Sort direction")]
OpenState = Annotated[Literal["open", "closed", "all"], Field(description="State filter")]

RunStatus = Literal[
    "completed",
    "action_required",
    "cancelled",
    "failure",
    "neutral",
    "skipped",
    "stale",
    "success",
    "timed_out",
    "in_progress",
    "queued",
    "requested",
    "waiting",
]
StatsKind = Literal[
    "all", "repos", "hooks", "pages", "orgs", "users", "pulls", "issues", "milestones", "gists", "comments"
]


@dataclass
class GitHubContext:
    client: GitHubClient
    repos: RepositoryAPI
    pulls: PullRequestAPI
    issues: IssueAPI
    actions: ActionsAPI
    admin: AdminAPI
    users: UserAPI
    strings: Strings
    is_enterprise: bool

    async def aclose(self) -> None:
        await self.client.aclose()


def build_context(config: Config, *, transport: httpx.AsyncBaseTransport | None = None) -> GitHubContext:
    client = GitHubClient(config, transport=transport)
    return GitHubContext(
        client=client,
        repos=RepositoryAPI(client),
        pulls=PullRequestAPI(client),
        issues=IssueAPI(client),
        actions=ActionsAPI(client),
        admin=AdminAPI(client),
        users=UserAPI(client),
        strings=Strings(config.language),
        is_enterprise=config.is_enterprise,
    )


def render(title: str, payload: Any) -> str:
    return f"{title}\n\n{json.dumps(payload, indent=2, ensure_ascii=False)}"


def _guarded(func: Callable[..., Awaitable[str]], strings: Strings, action: str) -> Callable[..., Awaitable[str]]:
    @functools.wraps(func)
    async def wrapper(**arguments: Any) -> str:
        try:
            return await func(**arguments)
        except GitHubError as exc:
            LOGGER.error("%s failed (status %s): %s", action, exc.status, exc)
            raise ToolError(strings.t("common", "error_action", action=action, message=str(exc))) from exc

    return wrapper


def build_server(context: GitHubContext) -> tuple[FastMCP, List[str]]:
    app = FastMCP(name=SERVER_NAME, instructions=context.strings.t("common", "server_description"))
    names = register_tools(app, context)
    return app, names


def register_tools(app: FastMCP, context: GitHubContext) -> List[str]:
    """Register the full tool catalogue on ``app`` and return the tool names."""

    strings = context.strings
    names: List[str] = []

    def tool(name: str, description: str, action: str):
        def decorator(func: Callable[..., Awaitable[str]]) -> Callable[..., Awaitable[str]]:
            app.tool(name=name, description=description)(_guarded(func, strings, action))
            names.append(name)
            return func

        return decorator

    def require(**fields: Any) -> None:
        for field, value in fields.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ToolError(strings.t("common", "error_required", field=field))

    def require_enterprise(feature: str) -> None:
        if not context.is_enterprise:
            raise ToolError(strings.t("common", "enterprise_only", feature=feature))

    # -- repositories -------------------------------------------------------

    @tool("list-repositories", "List repositories for a user or organization.", "listing repositories")
    async def list_repositories(
        owner: Annotated[str, Field(description="User or organization name")],
        isOrg: Annotated[bool, Field(description="Treat owner as an organization")] = False,
        type: Annotated[
            Literal["all", "owner", "member", "public", "private", "forks", "sources"],
            Field(description="Repository type filter"),
        ] = "all",
        sort: Annotated[
            Literal["created", "updated", "pushed", "full_name"], Field(description="Sort field")
        ] = "full_name",
        page: Page = 1,
        perPage: PerPage = 30,
    ) -> str:
        require(owner=owner)
        if isOrg:
            repos = await context.repos.list_organization_repositories(owner, type, sort, page, perPage)
        else:
            repos = await context.repos.list_repositories(owner, type, sort, page, perPage)
        if not repos:
            return strings.t("repos", "repo_list_empty", owner=owner)
        owner_type = strings.t("repos", "org_type" if isOrg else "user_type")
        title = strings.t("repos", "repo_list_title", type=owner_type, name=owner, count=len(repos))
        return render(title, [formatting.format_repository(repo, strings) for repo in repos])

    @tool("get-repository", "Get details for a single repository.", "fetching the repository")
    async def get_repository(owner: Owner, repo: Repo) -> str:
        require(owner=owner, repo=repo)
        data = await context.repos.get_repository(owner, repo)
        title = strings.t("repos", "repo_detail_title", owner=owner, repo=repo)
        return render(title, formatting.format_repository(data, strings))

    @tool("list-branches", "List branches of a repository.", "listing branches")
    async def list_branches(
        owner: Owner,
        repo: Repo,
        protected_only: Annotated[bool, Field(description="Only return protected branches")] = False,
        page: Page = 1,
        perPage: PerPage = 30,
    ) -> str:
        require(owner=owner, repo=repo)
        branches = await context.repos.list_branches(owner, repo, protected_only, page, perPage)
        if not branches:
            return strings.t("repos", "branch_list_empty", owner=owner, repo=repo)
        title = strings.t(
            "repos",
            "branch_list_title",
            owner=owner,
            repo=repo,
            count=len(branches),
            filter=strings.t("repos", "protected_branches_only") if protected_only else "",
        )
        return render(title, [formatting.format_branch(branch) for branch in branches])

    @tool("get-content", "Get a file or directory listing from a repository.", "fetching repository content")
    async def get_content(
        owner: Owner,
        repo: Repo,
        path: Annotated[str, Field(description="File or directory path")],
        ref: Annotated[str | None, Field(description="Branch, tag or commit SHA")] = None,
    ) -> str:
        require(owner=owner, repo=repo, path=path)
        content = await context.repos.get_content(owner, repo, path, ref)
        is_directory = isinstance(content, list)
        title = strings.t(
            "repos",
            "content_title",
            type=strings.t("repos", "directory_type" if is_directory else "file_type"),
            path=path,
            count=len(content) if is_directory else 1,
        )
        return render(title, formatting.format_content(content, strings))

    @tool("create-repository", "Create a repository for the authenticated user or an organization.", "creating the repository")
    async def create_repository(
        name: Annotated[str, Field(description="Repository name", min_length=1)],
        description: Annotated[str | None, Field(description="Repository description")] = None,
        private: Annotated[bool | None, Field(description="Whether the repository is private")] = None,
        auto_init: Annotated[bool | None, Field(description="Initialize with a README")] = None,
        gitignore_template: Annotated[str | None, Field(description=".gitignore template name")] = None,
        license_template: Annotated[str | None, Field(description="License template keyword")] = None,
        org: Annotated[str | None, Field(description="Organization to create the repository in")] = None,
    ) -> str:
        require(name=name)
        options = without_none(
            {
                "name": name,
                "description": description,
                "private": private,
                "auto_init": auto_init,
                "gitignore_template": gitignore_template,
                "license_template": license_template,
            }
        )
        if org:
            created = await context.repos.create_organization_repository(org, options)
        else:
            created = await context.repos.create_repository(options)
        title = strings.t("repos", "repo_created", full_name=created.get("full_name"))
        return render(title, formatting.format_repository(created, strings))

    @tool("update-repository", "Update repository settings.", "updating the repository")
    async def update_repository(
        owner: Owner,
        repo: Repo,
        description: Annotated[str | None, Field(description="New description")] = None,
        private: Annotated[bool | None, Field(description="Change privacy setting")] = None,
        default_branch: Annotated[str | None, Field(description="Change the default branch")] = None,
        has_issues: Annotated[bool | None, Field(description="Enable or disable issues")] = None,
        has_projects: Annotated[bool | None, Field(description="Enable or disable projects")] = None,
        has_wiki: Annotated[bool | None, Field(description="Enable or disable the wiki")] = None,
        archived: Annotated[bool | None, Field(description="Archive or unarchive the repository")] = None,
    ) -> str:
        require(owner=owner, repo=repo)
        options = without_none(
            {
                "description": description,
                "private": private,
                "default_branch": default_branch,
                "has_issues": has_issues,
                "has_projects": has_projects,
                "has_wiki": has_wiki,
                "archived": archived,
            }
        )
        updated = await context.repos.update_repository(owner, repo, options)
        title = strings.t("repos", "repo_updated", full_name=updated.get("full_name"))
        return render(title, formatting.format_repository(updated, strings))

    @tool("delete-repository", "Delete a repository. Irreversible; requires confirm=true.", "deleting the repository")
    async def delete_repository(
        owner: Owner,
        repo: Repo,
        confirm: Annotated[bool, Field(description="Must be true to delete")] = False,
    ) -> str:
        require(owner=owner, repo=repo)
        if not confirm:
            raise ToolError(strings.t("repos", "delete_confirm_required"))
        await context.repos.delete_repository(owner, repo)
        return strings.t("repos", "repo_deleted", owner=owner, repo=repo)

    # -- pull requests ------------------------------------------------------

    @tool("list-pull-requests", "List pull requests in a repository.", "listing pull requests")
    async def list_pull_requests(
        owner: Owner,
        repo: Repo,
        state: OpenState = "open",
        sort: Annotated[
            Literal["created", "updated", "popularity", "long-running"], Field(description="Sort field")
        ] = "created",
        direction: Direction = "desc",
        page: Page = 1,
        per_page: PerPage = 30,
    ) -> str:
        require(owner=owner, repo=repo)
        pulls = await context.pulls.list_pull_requests(
            owner, repo, state=state, sort=sort, direction=direction, page=page, per_page=per_page
        )
        if not pulls:
            return strings.t("pulls", "pr_list_empty", owner=owner, repo=repo, state=state)
        title = strings.t("pulls", "pr_list_title", owner=owner, repo=repo, count=len(pulls))
        return render(title, [formatting.format_pull_request_summary(pr) for pr in pulls])

    @tool("get-pull-request", "Get details for a pull request.", "fetching pull request details")
    async def get_pull_request(owner: Owner, repo: Repo, pull_number: PullNumber) -> str:
        require(owner=owner, repo=repo)
        pr = await context.pulls.get_pull_request(owner, repo, pull_number)
        title = strings.t("pulls", "pr_detail_title", number=pull_number)
        return render(title, formatting.format_pull_request(pr))

    @tool("create-pull-request", "Open a new pull request.", "creating the pull request")
    async def create_pull_request(
        owner: Owner,
        repo: Repo,
        title: Annotated[str, Field(description="Pull request title")],
        head: Annotated[str, Field(description="Head branch ('user:feature' or 'feature')")],
        base: Annotated[str, Field(description="Base branch (e.g. 'main')")],
        body: Annotated[str | None, Field(description="Pull request description")] = None,
        draft: Annotated[bool, Field(description="Create as a draft")] = False,
    ) -> str:
        require(owner=owner, repo=repo, title=title, head=head, base=base)
        pr = await context.pulls.create_pull_request(
            owner, repo, title=title, head=head, base=base, body=body, draft=draft
        )
        message = strings.t("pulls", "pr_created", number=pr.get("number"), title=pr.get("title"))
        return render(message, formatting.format_pull_request(pr))

    @tool("update-pull-request", "Update the title, body, state or base of a pull request.", "updating the pull request")
    async def update_pull_request(
        owner: Owner,
        repo: Repo,
        pull_number: PullNumber,
        title: Annotated[str | None, Field(description="New title")] = None,
        body: Annotated[str | None, Field(description="New description")] = None,
        state: Annotated[Literal["open", "closed"] | None, Field(description="New state")] = None,
        base: Annotated[str | None, Field(description="New base branch")] = None,
        maintainer_can_modify: Annotated[
            bool | None, Field(description="Allow maintainers to push to the head branch")
        ] = None,
    ) -> str:
        require(owner=owner, repo=repo)
        pr = await context.pulls.update_pull_request(
            owner,
            repo,
            pull_number,
            title=title,
            body=body,
            state=state,
            base=base,
            maintainer_can_modify=maintainer_can_modify,
        )
        message = strings.t("pulls", "pr_updated", number=pr.get("number"), title=pr.get("title"))
        return render(message, formatting.format_pull_request(pr))

    @tool("merge-pull-request", "Merge a pull request.", "merging the pull request")
    async def merge_pull_request(
        owner: Owner,
        repo: Repo,
        pull_number: PullNumber,
        commit_title: Annotated[str | None, Field(description="Title for the merge commit")] = None,
        commit_message: Annotated[str | None, Field(description="Extra detail for the merge commit")] = None,
        merge_method: Annotated[
            Literal["merge", "squash", "rebase"], Field(description="Merge method")
        ] = "merge",
    ) -> str:
        require(owner=owner, repo=repo)
        result = await context.pulls.merge_pull_request(
            owner,
            repo,
            pull_number,
            commit_title=commit_title,
            commit_message=commit_message,
            merge_method=merge_method,
        )
        return strings.t(
            "pulls", "pr_merged", number=pull_number, message=result.get("message"), sha=result.get("sha")
        )

    # -- issues -------------------------------------------------------------

    @tool("list-issues", "List issues in a repository.", "listing issues")
    async def list_issues(
        owner: Owner,
        repo: Repo,
        state: OpenState = "open",
        sort: Annotated[Literal["created", "updated", "comments"], Field(description="Sort field")] = "created",
        direction: Direction = "desc",
        page: Page = 1,
        per_page: PerPage = 30,
    ) -> str:
        require(owner=owner, repo=repo)
        issues = await context.issues.list_issues(
            owner, repo, state=state, sort=sort, direction=direction, page=page, per_page=per_page
        )
        if not issues:
            return strings.t("issues", "issue_list_empty", owner=owner, repo=repo, state=state)
        title = strings.t("issues", "issue_list_title", owner=owner, repo=repo, count=len(issues))
        return render(title, [formatting.format_issue_summary(issue) for issue in issues])

    @tool("get-issue", "Get details for an issue.", "fetching issue details")
    async def get_issue(owner: Owner, repo: Repo, issue_number: IssueNumber) -> str:
        require(owner=owner, repo=repo)
        issue = await context.issues.get_issue(owner, repo, issue_number)
        title = strings.t("issues", "issue_detail_title", number=issue_number)
        return render(title, formatting.format_issue(issue))

    @tool("create-issue", "Open a new issue.", "creating the issue")
    async def create_issue(
        owner: Owner,
        repo: Repo,
        title: Annotated[str, Field(description="Issue title")],
        body: Annotated[str | None, Field(description="Issue body")] = None,
        labels: Annotated[List[str] | None, Field(description="Labels to apply")] = None,
        assignees: Annotated[List[str] | None, Field(description="Logins to assign")] = None,
        milestone: Annotated[int | None, Field(description="Milestone number")] = None,
    ) -> str:
        require(owner=owner, repo=repo, title=title)
        issue = await context.issues.create_issue(
            owner, repo, title=title, body=body, labels=labels, assignees=assignees, milestone=milestone
        )
        message = strings.t("issues", "issue_created", number=issue.get("number"), title=issue.get("title"))
        return render(message, formatting.format_issue(issue))

    @tool("update-issue", "Update an issue.", "updating the issue")
    async def update_issue(
        owner: Owner,
        repo: Repo,
        issue_number: IssueNumber,
        title: Annotated[str | None, Field(description="New title")] = None,
        body: Annotated[str | None, Field(description="New body")] = None,
        state: Annotated[Literal["open", "closed"] | None, Field(description="New state")] = None,
        labels: Annotated[List[str] | None, Field(description="Replacement label set")] = None,
        assignees: Annotated[List[str] | None, Field(description="Replacement assignee set")] = None,
        milestone: Annotated[int | None, Field(description="Milestone number")] = None,
    ) -> str:
        require(owner=owner, repo=repo)
        issue = await context.issues.update_issue(
            owner,
            repo,
            issue_number,
            title=title,
            body=body,
            state=state,
            labels=labels,
            assignees=assignees,
            milestone=milestone,
        )
        message = strings.t("issues", "issue_updated", number=issue.get("number"), title=issue.get("title"))
        return render(message, formatting.format_issue(issue))

    @tool("list-issue-comments", "List comments on an issue or pull request.", "listing issue comments")
    async def list_issue_comments(
        owner: Owner,
        repo: Repo,
        issue_number: IssueNumber,
        page: Page = 1,
        per_page: PerPage = 30,
    ) -> str:
        require(owner=owner, repo=repo)
        comments = await context.issues.list_comments(owner, repo, issue_number, page=page, per_page=per_page)
        if not comments:
            return strings.t("issues", "comment_list_empty", number=issue_number)
        title = strings.t("issues", "comment_list_title", number=issue_number, count=len(comments))
        return render(title, [formatting.format_comment(comment) for comment in comments])

    @tool("create-issue-comment", "Add a comment to an issue or pull request.", "adding the comment")
    async def create_issue_comment(
        owner: Owner,
        repo: Repo,
        issue_number: IssueNumber,
        body: Annotated[str, Field(description="Comment text (Markdown)")],
    ) -> str:
        require(owner=owner, repo=repo, body=body)
        comment = await context.issues.create_comment(owner, repo, issue_number, body)
        title = strings.t("issues", "comment_created", number=issue_number)
        return render(title, formatting.format_comment(comment))

    # -- actions ------------------------------------------------------------

    @tool("list-workflows", "List GitHub Actions workflows in a repository.", "listing workflows")
    async def list_workflows(owner: Owner, repo: Repo, page: Page = 1, perPage: PerPage = 30) -> str:
        require(owner=owner, repo=repo)
        response = await context.actions.list_workflows(owner, repo, page, perPage)
        workflows = response.get("workflows") or []
        if not workflows:
            return strings.t("actions", "workflow_list_empty", owner=owner, repo=repo)
        count = response.get("total_count", len(workflows))
        title = strings.t("actions", "workflow_list_title", owner=owner, repo=repo, count=count)
        return render(title, [formatting.format_workflow(workflow) for workflow in workflows])

    @tool("list-workflow-runs", "List workflow runs for a repository or a single workflow.", "listing workflow runs")
    async def list_workflow_runs(
        owner: Owner,
        repo: Repo,
        workflow_id: Annotated[
            int | str | None, Field(description="Workflow ID or file name; omit for all workflows")
        ] = None,
        branch: Annotated[str | None, Field(description="Filter by branch")] = None,
        status: Annotated[RunStatus | None, Field(description="Filter by run status")] = None,
        page: OptionalPage = None,
        perPage: OptionalPerPage = None,
    ) -> str:
        require(owner=owner, repo=repo)
        response = await context.actions.list_workflow_runs(
            owner, repo, workflow_id, branch=branch, status=status, page=page, per_page=perPage
        )
        runs = response.get("workflow_runs") or []
        if not runs:
            if workflow_id:
                return strings.t("actions", "run_list_empty_workflow", workflow=workflow_id, owner=owner, repo=repo)
            return strings.t("actions", "run_list_empty", owner=owner, repo=repo)
        if workflow_id:
            scope = strings.t("actions", "run_list_scope_workflow", workflow=workflow_id)
        else:
            scope = strings.t("actions", "run_list_scope_all")
        count = response.get("total_count", len(runs))
        title = strings.t("actions", "run_list_title", scope=scope, owner=owner, repo=repo, count=count)
        return render(title, [formatting.format_workflow_run(run) for run in runs])

    @tool("get-workflow-run", "Get details for a workflow run.", "fetching the workflow run")
    async def get_workflow_run(owner: Owner, repo: Repo, run_id: RunId) -> str:
        require(owner=owner, repo=repo)
        run = await context.actions.get_workflow_run(owner, repo, run_id)
        title = strings.t("actions", "run_detail_title", run_id=run_id)
        return render(title, formatting.format_workflow_run(run))

    @tool(
        "get-workflow-run-logs",
        "Get the download URL of a workflow run's log archive.",
        "fetching workflow run logs",
    )
    async def get_workflow_run_logs(owner: Owner, repo: Repo, run_id: RunId) -> str:
        require(owner=owner, repo=repo)
        result = await context.actions.get_workflow_run_logs(owner, repo, run_id)
        if not result or not result.get("url"):
            return strings.t("actions", "run_logs_missing", run_id=run_id)
        title = strings.t("actions", "run_logs_title", run_id=run_id, owner=owner, repo=repo)
        return render(title, {"run_id": run_id, "logs_url": result["url"]})

    @tool("trigger-workflow", "Trigger a workflow_dispatch event.", "triggering the workflow")
    async def trigger_workflow(
        owner: Owner,
        repo: Repo,
        workflow_id: WorkflowId,
        ref: Annotated[str, Field(description="Git reference (branch, tag or SHA)")],
        inputs: Annotated[Dict[str, str] | None, Field(description="Workflow inputs")] = None,
    ) -> str:
        require(owner=owner, repo=repo, ref=ref)
        await context.actions.dispatch_workflow(owner, repo, workflow_id, ref, inputs)
        return strings.t("actions", "workflow_triggered", workflow=workflow_id, owner=owner, repo=repo, ref=ref)

    @tool("rerun-workflow", "Re-run a workflow run.", "re-running the workflow")
    async def rerun_workflow(
        owner: Owner,
        repo: Repo,
        run_id: RunId,
        enable_debug_logging: Annotated[bool, Field(description="Enable runner debug logging")] = False,
    ) -> str:
        require(owner=owner, repo=repo)
        await context.actions.rerun_workflow(owner, repo, run_id, enable_debug_logging)
        return strings.t("actions", "run_rerun", run_id=run_id, owner=owner, repo=repo)

    @tool("cancel-workflow-run", "Cancel an in-progress workflow run.", "cancelling the workflow run")
    async def cancel_workflow_run(owner: Owner, repo: Repo, run_id: RunId) -> str:
        require(owner=owner, repo=repo)
        await context.actions.cancel_workflow_run(owner, repo, run_id)
        return strings.t("actions", "run_cancelled", run_id=run_id, owner=owner, repo=repo)

    # -- enterprise administration -----------------------------------------

    @tool("get-license-info", "Get GitHub Enterprise license information.", "fetching license information")
    async def get_license_info() -> str:
        info = await context.admin.get_license_info()
        return render(strings.t("admin", "license_info_title"), info)

    @tool("get-enterprise-stats", "Get GitHub Enterprise system statistics.", "fetching enterprise statistics")
    async def get_enterprise_stats(
        kind: Annotated[StatsKind, Field(description="Statistics group")] = "all",
    ) -> str:
        stats = await context.admin.get_stats(kind)
        if kind == "all":
            title = strings.t("admin", "stats_title")
        else:
            title = strings.t("admin", "stats_kind_title", kind=kind)
        return render(title, stats)

    # -- users --------------------------------------------------------------

    @tool("list-users", "List users on the instance (site admin).", "listing users")
    async def list_users(
        per_page: OptionalPerPage = None,
        page: OptionalPage = None,
        filter: Annotated[
            Literal["all", "active", "suspended"] | None, Field(description="Filter users by status")
        ] = None,
        search: Annotated[str | None, Field(description="Search by username or email")] = None,
    ) -> str:
        users = await context.users.list_users(per_page=per_page, page=page, filter=filter, search=search)
        if not users:
            return strings.t("users", "user_list_empty")
        title = strings.t("users", "user_list_title", count=len(users))
        return render(title, [formatting.format_user(user) for user in users])

    @tool("get-user", "Get a user's profile.", "fetching the user")
    async def get_user(username: Username) -> str:
        require(username=username)
        user = await context.users.get_user(username)
        return render(strings.t("users", "user_detail_title", username=username), user)

    @tool("create-user", "Create a user (GitHub Enterprise Server only).", "creating the user")
    async def create_user(
        login: Annotated[str, Field(description="Username for the new user")],
        email: Annotated[str, Field(description="Email address for the new user")],
        name: Annotated[str | None, Field(description="Full name")] = None,
        company: Annotated[str | None, Field(description="Company")] = None,
        location: Annotated[str | None, Field(description="Location")] = None,
        bio: Annotated[str | None, Field(description="Biography")] = None,
        blog: Annotated[str | None, Field(description="Blog or website URL")] = None,
        twitter_username: Annotated[str | None, Field(description="Twitter username")] = None,
    ) -> str:
        require_enterprise("User creation")
        require(login=login, email=email)
        user = await context.users.create_user(
            login,
            email,
            name=name,
            company=company,
            location=location,
            bio=bio,
            blog=blog,
            twitter_username=twitter_username,
        )
        return render(strings.t("users", "user_created", username=login), user)

    @tool("update-user", "Update a user's profile (GitHub Enterprise Server only).", "updating the user")
    async def update_user(
        username: Username,
        email: Annotated[str | None, Field(description="Email address")] = None,
        name: Annotated[str | None, Field(description="Full name")] = None,
        company: Annotated[str | None, Field(description="Company")] = None,
        location: Annotated[str | None, Field(description="Location")] = None,
        bio: Annotated[str | None, Field(description="Biography")] = None,
        blog: Annotated[str | None, Field(description="Blog or website URL")] = None,
        twitter_username: Annotated[str | None, Field(description="Twitter username")] = None,
    ) -> str:
        require_enterprise("User update")
        require(username=username)
        user = await context.users.update_user(
            username,
            email=email,
            name=name,
            company=company,
            location=location,
            bio=bio,
            blog=blog,
            twitter_username=twitter_username,
        )
        return render(strings.t("users", "user_updated", username=username), user)

    @tool("delete-user", "Delete a user (GitHub Enterprise Server only).", "deleting the user")
    async def delete_user(username: Username) -> str:
        require_enterprise("User deletion")
        require(username=username)
        await context.users.delete_user(username)
        return strings.t("users", "user_deleted", username=username)

    @tool("suspend-user", "Suspend a user (GitHub Enterprise Server only).", "suspending the user")
    async def suspend_user(
        username: Username,
        reason: Annotated[str | None, Field(description="Reason for the suspension")] = None,
    ) -> str:
        require_enterprise("User suspension")
        require(username=username)
        await context.users.suspend_user(username, reason)
        message = strings.t("users", "user_suspended", username=username)
        if reason:
            message += strings.t("users", "suspend_reason", reason=reason)
        return message

    @tool("unsuspend-user", "Unsuspend a user (GitHub Enterprise Server only).", "unsuspending the user")
    async def unsuspend_user(username: Username) -> str:
        require_enterprise("User unsuspension")
        require(username=username)
        await context.users.unsuspend_user(username)
        return strings.t("users", "user_unsuspended", username=username)

    @tool("list-user-orgs", "List organizations a user belongs to.", "listing user organizations")
    async def list_user_orgs(username: Username, per_page: OptionalPerPage = None, page: OptionalPage = None) -> str:
        require(username=username)
        orgs = await context.users.list_user_organizations(username, per_page=per_page, page=page)
        if not orgs:
            return strings.t("users", "user_orgs_empty", username=username)
        title = strings.t("users", "user_orgs_title", username=username, count=len(orgs))
        return render(title, [formatting.format_organization(org) for org in orgs])

    LOGGER.debug("registered %d tools", len(names))
    return names
