import asyncio
import json
from typing import Any, Dict, Optional, Tuple

import click

from .._config import Config
from .._services import ApiClient
from .._utils._request_spec import Request
from ..authentication import AuthenticationPolicy
from ..models.errors import NetkitError
from ..models.exceptions import HttpError
from ..models.http_method import HttpMethod
from ..retry import DefaultRetryStrategy, RetryPolicy


def _parse_pairs(values: Tuple[str, ...], separator: str, label: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition(separator)
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY{separator}VALUE, got {value!r}", param_hint=label)
        pairs[key.strip()] = item.strip()
    return pairs


def _format_body(body: bytes, raw: bool) -> str:
    text = body.decode("utf-8", errors="replace")
    if raw or not text:
        return text
    try:
        return json.dumps(json.loads(text), indent=2)
    except ValueError:
        return text


async def _execute(
    config: Config, descriptor: Request[bytes], retry_policy: RetryPolicy
) -> bytes:
    async with ApiClient(config) as client:
        return await client.data(descriptor, retry_policy=retry_policy)


@click.command()
@click.argument("method", type=click.Choice([m.value for m in HttpMethod], case_sensitive=False))
@click.argument("target")
@click.option("--base-url", "-b", envvar="NETKIT_BASE_URL", help="Base URL for relative targets.")
@click.option("--header", "-H", "headers", multiple=True, help="Request header as 'Name: value'.")
@click.option("--query", "-q", "query", multiple=True, help="Query parameter as 'key=value'.")
@click.option("--data", "-d", "data", help="JSON request body.")
@click.option("--token", envvar="NETKIT_TOKEN", help="Bearer token sent as Authorization header.")
@click.option("--retries", default=3, show_default=True, type=click.IntRange(min=0), help="Maximum retries.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Timeout in seconds.")
@click.option("--raw", is_flag=True, help="Print the response body without formatting.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def request(
    method: str,
    target: str,
    base_url: Optional[str],
    headers: Tuple[str, ...],
    query: Tuple[str, ...],
    data: Optional[str],
    token: Optional[str],
    retries: int,
    timeout: Optional[float],
    raw: bool,
    verbose: bool,
) -> None:
    """Send METHOD to TARGET, a path relative to --base-url or an absolute URL."""
    body: Any = None
    if data is not None:
        try:
            body = json.loads(data)
        except ValueError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--data") from e

    is_absolute = target.startswith(("http://", "https://"))
    overrides: Dict[str, Any] = {}
    if verbose:
        overrides["debug"] = True
    if base_url is not None and not is_absolute:
        overrides["base_url"] = base_url
    if timeout:
        overrides["timeout"] = timeout
    try:
        config = Config.from_env(**overrides)
        descriptor: Request[bytes] = Request(
            method=HttpMethod(method.upper()),
            response_type=bytes,
            path="" if is_absolute else target,
            absolute_url=target if is_absolute else None,
            query=_parse_pairs(query, "=", "--query") or None,
            headers=_parse_pairs(headers, ":", "--header") or None,
            body=body,
            authentication_policy=AuthenticationPolicy.bearer(token) if token else None,
        )
        policy = RetryPolicy(strategy=DefaultRetryStrategy(), max_retries=retries)
        result = asyncio.run(_execute(config, descriptor, policy))
    except HttpError as e:
        click.echo(f"HTTP {e.status_code} from {e.url}", err=True)
        if e.body:
            click.echo(_format_body(e.body, raw), err=True)
        raise click.exceptions.Exit(1)
    except (NetkitError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise click.exceptions.Exit(1)

    click.echo(_format_body(result, raw))
