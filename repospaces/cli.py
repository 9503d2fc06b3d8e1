import asyncio
import uuid

import click

from repospaces.app import Container, create_container
from repospaces.log import setup_logging
from repospaces.managers.workspaces import WorkspaceNotFoundError
from repospaces.models.workspace import CloudWorkspace
from repospaces.settings import get_settings
from repospaces.views.nodes import ViewNode


def _container() -> Container:
    settings = get_settings()
    log_level = click.get_current_context().find_root().params.get("log_level")
    setup_logging(log_level or settings.log_level)
    return create_container(settings)


@click.group()
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level (default: from REPOSPACES_LOG_LEVEL or INFO).",
)
def main(log_level: str | None) -> None:
    """Repospaces - resolve repository workspaces to local checkouts."""


@main.command("list")
def list_workspaces() -> None:
    """List cloud and local workspaces."""
    container = _container()
    workspaces = asyncio.run(container.service.list_workspaces())
    if not workspaces:
        click.echo("No workspaces.")
        return
    for workspace in workspaces:
        click.echo(f"[{workspace.type}] {workspace.id}  {workspace.name}  ({len(workspace.repositories)} repositories)")


@main.command()
@click.option("--workspace", "workspace_id", default=None, help="Only show this workspace.")
def tree(workspace_id: str | None) -> None:
    """Show workspaces with their resolved repositories."""
    container = _container()
    try:
        lines = asyncio.run(_render_tree(container, workspace_id))
    except WorkspaceNotFoundError as exc:
        raise click.ClickException(str(exc)) from None
    for line in lines:
        click.echo(line)


async def _render_tree(container: Container, workspace_id: str | None) -> list[str]:
    nodes = await container.root.get_children()
    if workspace_id is not None:
        nodes = [n for n in nodes if n.workspace.id == workspace_id]
        if not nodes:
            raise WorkspaceNotFoundError(workspace_id)

    lines: list[str] = []
    for node in nodes:
        lines.append(_format(node, 0))
        lines.extend(_format(child, 1) for child in await node.get_children())
    return lines


def _format(node: ViewNode, depth: int) -> str:
    item = node.get_tree_item()
    text = f"{'  ' * depth}{item.label}"
    if item.description:
        text += f"  {item.description}"
    elif depth and item.id is None:
        text += "  (unresolved)"
    return text


@main.command()
@click.argument("workspace_id")
def candidates(workspace_id: str) -> None:
    """Show every local clone found for each repository of a cloud workspace."""
    container = _container()
    try:
        lines = asyncio.run(_render_candidates(container, workspace_id))
    except WorkspaceNotFoundError as exc:
        raise click.ClickException(str(exc)) from None
    for line in lines:
        click.echo(line)


async def _render_candidates(container: Container, workspace_id: str) -> list[str]:
    workspace = await container.service.get_workspace(workspace_id)
    if not isinstance(workspace, CloudWorkspace):
        msg = f"Workspace '{workspace_id}' is a local workspace; its paths are fixed"
        raise click.ClickException(msg)

    lines: list[str] = []
    for descriptor in workspace.repositories:
        location = await container.resolver.locate(workspace, descriptor)
        if location.remembered and location.address is not None:
            lines.append(f"{descriptor.id}  {descriptor.name}  {location.address.path} (remembered)")
        elif location.candidates:
            lines.append(f"{descriptor.id}  {descriptor.name}")
            lines.extend(f"  {path}" for path in location.candidates)
        else:
            lines.append(f"{descriptor.id}  {descriptor.name}  (no local clone)")
    return lines


@main.command("set-path")
@click.argument("workspace_id")
@click.argument("repo_id")
@click.argument("local_path", type=click.Path(file_okay=False, resolve_path=True))
def set_path(workspace_id: str, repo_id: str, local_path: str) -> None:
    """Remember LOCAL_PATH as the clone of a cloud workspace repository."""
    container = _container()
    asyncio.run(_set_path(container, workspace_id, repo_id, local_path))
    click.echo(f"{workspace_id}/{repo_id} -> {local_path}")


async def _set_path(container: Container, workspace_id: str, repo_id: str, local_path: str) -> None:
    workspace = await container.service.get_cloud_workspace(workspace_id)
    if workspace is None:
        raise click.ClickException(f"Cloud workspace '{workspace_id}' not found")
    if not any(repo.id == repo_id for repo in workspace.repositories):
        raise click.ClickException(f"Repository '{repo_id}' is not part of workspace '{workspace_id}'")
    await container.service.update_cloud_workspace_repo_local_path(workspace_id, repo_id, local_path)


# ---------------------------------------------------------------------------
# Local workspaces
# ---------------------------------------------------------------------------


@main.group()
def local() -> None:
    """Manage local workspaces."""


@local.command("add")
@click.argument("name")
@click.argument("paths", nargs=-1, required=True, type=click.Path(file_okay=False, resolve_path=True))
@click.option("--id", "local_id", default=None, help="Workspace ID (default: random UUID).")
def add_local(name: str, paths: tuple[str, ...], local_id: str | None) -> None:
    """Create or replace a local workspace NAME holding PATHS."""
    container = _container()
    local_id = local_id or str(uuid.uuid4())
    asyncio.run(container.store.add_local_workspace(local_id, name, list(paths)))
    click.echo(f"Local workspace {local_id} ({name}) saved with {len(paths)} repositories.")


if __name__ == "__main__":
    main()
