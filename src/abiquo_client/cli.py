"""Command-line interface for interacting with an Abiquo cloud."""
from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import requests
import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install abiquo-client[cli]' to enable this command."
    ) from exc

from . import AbiquoClient
from .auth.base import AuthStrategy
from .auth.basic import BasicAuth
from .auth.oauth import OAuth1Auth
from .auth.token import TokenAuth
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import DEFAULT_API_VERSION
from .exceptions import ApiError, HttpError, ResolutionError, UnexpectedResponseError
from .models.base import ResourceDto

app = typer.Typer(help="Abiquo cloud management CLI.", no_args_is_help=True)

enterprises_app = typer.Typer(help="Enterprise operations.")
users_app = typer.Typer(help="User operations.")
datacenters_app = typer.Typer(help="Datacenter operations.")
racks_app = typer.Typer(help="Rack operations.")
locations_app = typer.Typer(help="Cloud location operations.")
licenses_app = typer.Typer(help="License operations.")
hypervisors_app = typer.Typer(help="Hypervisor type operations.")
app.add_typer(enterprises_app, name="enterprises")
app.add_typer(users_app, name="users")
app.add_typer(datacenters_app, name="datacenters")
app.add_typer(racks_app, name="racks")
app.add_typer(locations_app, name="locations")
app.add_typer(licenses_app, name="licenses")
app.add_typer(hypervisors_app, name="hypervisors")


def _build_client(
    base_url: str,
    auth: str,
    username: str | None,
    password: str | None,
    token: str | None,
    verify_ssl: bool,
    cert_path: Path | None,
    timeout: float,
    api_version: str,
    *,
    consumer_key: str | None = None,
    consumer_secret: str | None = None,
    token_secret: str | None = None,
) -> AbiquoClient:
    auth = auth.lower()
    if auth not in {"basic", "token", "oauth"}:
        raise typer.BadParameter("--auth must be one of 'basic', 'token' or 'oauth'.")

    strategy: AuthStrategy
    if auth == "oauth":
        if not (consumer_key and consumer_secret and token and token_secret):
            raise typer.BadParameter(
                "--consumer-key, --consumer-secret, --token and --token-secret are required "
                "when --auth oauth is selected."
            )
        strategy = OAuth1Auth(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=token,
            access_token_secret=token_secret,
        )
    elif auth == "token":
        if not token:
            raise typer.BadParameter("--token is required when --auth token is selected.")
        strategy = TokenAuth(token=token)
    else:
        if not username or not password:
            raise typer.BadParameter("--username and --password are required for basic auth.")
        strategy = BasicAuth(username=username, password=password)

    verify_target: bool | str
    if cert_path:
        expanded_cert = cert_path.expanduser()
        if not expanded_cert.exists():
            raise typer.BadParameter("Certificate file not found for --cert option.")
        if not verify_ssl:
            raise typer.BadParameter("Cannot combine --cert with --no-verify.")
        verify_target = str(expanded_cert)
    else:
        verify_target = verify_ssl

    return AbiquoClient(
        base_url=base_url,
        auth_strategy=strategy,
        verify_ssl=verify_target,
        timeout=timeout,
        api_version=api_version,
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered_rows = list(rows)
    if view.sort_key:
        ordered_rows.sort(key=view.sort_key)
    for row in ordered_rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(
    payload: ResourceDto | Sequence[ResourceDto], *, view_id: str | None, json_output: bool
) -> None:
    if isinstance(payload, ResourceDto):
        _echo_json(payload.to_wire())
        return
    rows = [item.to_wire() for item in payload]
    view = CLI_TABLE_VIEWS.get(view_id) if view_id else None
    if json_output or view is None or not rows:
        _echo_json(rows)
        return
    _render_rich_table(view, rows)


def _handle_http_error(exc: HttpError) -> None:
    message = f"Request failed (status {exc.status_code}): {exc}"
    if isinstance(exc, ApiError):
        for entry in exc.errors:
            message += f"\n  {entry.code}: {entry.message}"
    elif exc.details:
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _fail(message: str) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _run(client: AbiquoClient, operation) -> Any:
    """Run `operation(client)` and turn client failures into CLI errors."""
    with client:
        try:
            return operation(client)
        except HttpError as exc:
            _handle_http_error(exc)
        except (ResolutionError, UnexpectedResponseError) as exc:
            _fail(str(exc))
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            _fail(f"Failed to communicate with the Abiquo API: {reason}")
    return None


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    # Respect ABIQUO_VERIFY_SSL environment variable when present.
    env_verify = os.getenv("ABIQUO_VERIFY_SSL")
    if env_verify is None:
        default_verify = True
    else:
        default_verify = env_verify.strip().lower() not in {"0", "false", "no", "off"}

    return {
        "base_url": typer.Option(
            ..., "--base-url", envvar="ABIQUO_BASE_URL", help="Abiquo API base URL."
        ),
        "username": typer.Option(
            None,
            "--username",
            "-u",
            envvar="ABIQUO_USERNAME",
            help="Username for basic auth.",
        ),
        "password": typer.Option(
            None,
            "--password",
            "-p",
            envvar="ABIQUO_PASSWORD",
            help="Password for basic auth.",
            hide_input=True,
        ),
        "token": typer.Option(
            None,
            "--token",
            envvar="ABIQUO_TOKEN",
            help="Bearer token when --auth=token, or the OAuth access token when --auth=oauth.",
        ),
        "token_secret": typer.Option(
            None,
            "--token-secret",
            envvar="ABIQUO_TOKEN_SECRET",
            help="OAuth access token secret when --auth=oauth.",
            hide_input=True,
        ),
        "consumer_key": typer.Option(
            None,
            "--consumer-key",
            envvar="ABIQUO_CONSUMER_KEY",
            help="OAuth application key when --auth=oauth.",
        ),
        "consumer_secret": typer.Option(
            None,
            "--consumer-secret",
            envvar="ABIQUO_CONSUMER_SECRET",
            help="OAuth application secret when --auth=oauth.",
            hide_input=True,
        ),
        "auth": typer.Option(
            "basic",
            "--auth",
            "-a",
            case_sensitive=False,
            help="Authentication strategy to use (basic, token or oauth).",
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            envvar="ABIQUO_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "cert_path": typer.Option(
            None,
            "--cert",
            envvar="ABIQUO_CA_CERT",
            help="Path to a custom CA bundle for TLS verification.",
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "api_version": typer.Option(
            DEFAULT_API_VERSION,
            "--api-version",
            envvar="ABIQUO_API_VERSION",
            help="API version sent with every media type.",
            show_default=True,
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
    }


_SHARED_OPTIONS = _shared_options()


@enterprises_app.command("list")
def enterprises_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List enterprises."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    enterprises = _run(client, lambda c: c.enterprises.list_enterprises())
    _present_output(enterprises, view_id="enterprises.list", json_output=output_json)


@enterprises_app.command("get")
def enterprises_get(
    enterprise_id: str = typer.Argument(..., help="Enterprise identifier."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
) -> None:
    """Show a single enterprise."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    enterprise = _run(client, lambda c: c.enterprises.get_enterprise(enterprise_id))
    _present_output(enterprise, view_id=None, json_output=True)


@enterprises_app.command("create")
def enterprises_create(
    name: str = typer.Option(..., "--name", help="Name of the new enterprise."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
) -> None:
    """Create an enterprise and print the stored record."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    enterprise = _run(client, lambda c: c.enterprises.create_enterprise(name))
    _present_output(enterprise, view_id=None, json_output=True)


@users_app.command("whoami")
def users_whoami(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
) -> None:
    """Show the user the credentials authenticate as."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    user = _run(client, lambda c: c.enterprises.get_current_user())
    _present_output(user, view_id=None, json_output=True)


@users_app.command("list")
def users_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List users of every enterprise."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    users = _run(client, lambda c: c.enterprises.list_users())
    _present_output(users, view_id="users.list", json_output=output_json)


@datacenters_app.command("list")
def datacenters_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List datacenters."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    datacenters = _run(client, lambda c: c.infrastructure.list_datacenters())
    _present_output(datacenters, view_id="datacenters.list", json_output=output_json)


@datacenters_app.command("find")
def datacenters_find(
    name: str = typer.Argument(..., help="Datacenter name."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
) -> None:
    """Look up a datacenter by name."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    datacenter = _run(client, lambda c: c.infrastructure.find_datacenter(name))
    if datacenter is None:
        _fail(f"Datacenter '{name}' not found.")
        return
    _present_output(datacenter, view_id=None, json_output=True)


@racks_app.command("list")
def racks_list(
    datacenter_name: str = typer.Option(..., "--datacenter", help="Datacenter name."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the racks of a datacenter."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )

    def _racks(c: AbiquoClient):
        datacenter = c.infrastructure.find_datacenter(datacenter_name)
        if datacenter is None:
            return None
        return c.infrastructure.list_racks(datacenter)

    racks = _run(client, _racks)
    if racks is None:
        _fail(f"Datacenter '{datacenter_name}' not found.")
        return
    _present_output(racks, view_id="racks.list", json_output=output_json)


@locations_app.command("list")
def locations_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the locations available to the current user."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    locations = _run(client, lambda c: c.cloud.list_locations())
    _present_output(locations, view_id="datacenters.list", json_output=output_json)


@licenses_app.command("add")
def licenses_add(
    key: str = typer.Argument(..., help="License key."),
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
) -> None:
    """Install a license key."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    license_dto = _run(client, lambda c: c.configuration.add_license(key))
    _present_output(license_dto, view_id=None, json_output=True)


@licenses_app.command("list")
def licenses_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List installed licenses."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    licenses = _run(client, lambda c: c.configuration.list_licenses())
    _present_output(licenses, view_id="licenses.list", json_output=output_json)


@hypervisors_app.command("list")
def hypervisors_list(
    base_url: str = _SHARED_OPTIONS["base_url"],
    username: str | None = _SHARED_OPTIONS["username"],
    password: str | None = _SHARED_OPTIONS["password"],
    token: str | None = _SHARED_OPTIONS["token"],
    token_secret: str | None = _SHARED_OPTIONS["token_secret"],
    consumer_key: str | None = _SHARED_OPTIONS["consumer_key"],
    consumer_secret: str | None = _SHARED_OPTIONS["consumer_secret"],
    auth: str = _SHARED_OPTIONS["auth"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    cert_path: Path | None = _SHARED_OPTIONS["cert_path"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    api_version: str = _SHARED_OPTIONS["api_version"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List supported hypervisor types."""

    client = _build_client(
        base_url, auth, username, password, token, verify_ssl, cert_path, timeout, api_version,
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_secret=token_secret,
    )
    hypervisors = _run(client, lambda c: c.configuration.list_hypervisor_types())
    _present_output(hypervisors, view_id="hypervisors.list", json_output=output_json)


def main() -> None:  # pragma: no cover - console entrypoint
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
