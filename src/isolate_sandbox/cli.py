"""Command-line interface for isolate-sandbox.

Usage:
    isolate-sandbox --base-url http://localhost:3000 health
    isolate-sandbox run 'print("hello")'          # Inline Python
    isolate-sandbox run script.py --keep-box      # Run file, keep its box
    isolate-sandbox get 7 out.txt -o ./out.txt    # Fetch a file from box 7
"""

import binascii
import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError

from isolate_sandbox import __version__
from isolate_sandbox.client import IsolateSandbox
from isolate_sandbox.config import ClientConfig
from isolate_sandbox.errors import ApiError
from isolate_sandbox.models import ExecuteRequest
from isolate_sandbox.utils.logger import configure_logging

EXIT_SUCCESS = 0
EXIT_CLI_ERROR = 2
EXIT_TIMEOUT = 124  # Matches `timeout` command
EXIT_API_ERROR = 125

EXTENSION_MAP: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".rs": "rust",
}


def detect_language(source: str | None) -> str | None:
    """Auto-detect language from file extension.

    Args:
        source: File path, stdin marker ("-") or inline code

    Returns:
        Detected language name or None if cannot detect
    """
    if not source or source == "-":
        return None

    path = Path(source)
    if path.suffix:
        return EXTENSION_MAP.get(path.suffix.lower())

    return None


def format_error(error: ApiError) -> str:
    lines = [click.style(f"Error: {error.message}", fg="red", bold=True)]

    if error.is_transport_error:
        lines.append("  The server could not be reached. Check --base-url.")
    elif error.is_timeout:
        lines.append("  The execution may still be running on the server. Increase --timeout-ms.")
    elif error.is_auth_error:
        lines.append("  Check the API key (--api-key or ISOLATE_SANDBOX_API_KEY).")
    else:
        lines.append(f"  Server responded with HTTP {error.status_code}.")

    return "\n".join(lines)


def fail(error: ApiError) -> NoReturn:
    click.echo(format_error(error), err=True)
    sys.exit(EXIT_TIMEOUT if error.is_timeout else EXIT_API_ERROR)


def read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Inline code can exceed the filesystem name length limit.
        is_file = False
    return path.read_text() if is_file else source


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--base-url", envvar="ISOLATE_SANDBOX_BASE_URL", help="Server URL, e.g. http://localhost:3000")
@click.option("--timeout-ms", type=click.IntRange(min=1), help="Request timeout in milliseconds [default: 30000]")
@click.option("--api-key", envvar="ISOLATE_SANDBOX_API_KEY", help="Value for the X-API-Key header")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
@click.version_option(__version__, "-V", "--version", prog_name="isolate-sandbox")
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str | None,
    timeout_ms: int | None,
    api_key: str | None,
    verbose: bool,
) -> None:
    """Run code on an isolate-sandbox server and manage its boxes."""
    configure_logging("DEBUG" if verbose else "WARNING")

    settings: dict[str, object] = {}
    if base_url is not None:
        settings["base_url"] = base_url
    if timeout_ms is not None:
        settings["timeout_ms"] = timeout_ms
    if api_key is not None:
        settings["api_key"] = api_key

    try:
        config = ClientConfig(**settings)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc.errors()[0]['msg']} (is --base-url set?)") from exc

    ctx.obj = IsolateSandbox(config)


@main.command()
@click.pass_obj
def health(client: IsolateSandbox) -> None:
    """Show the server health status."""
    try:
        click.echo(client.health().status)
    except ApiError as e:
        fail(e)


@main.command()
@click.pass_obj
def languages(client: IsolateSandbox) -> None:
    """List supported languages."""
    try:
        for language in client.list_languages().languages:
            click.echo(language)
    except ApiError as e:
        fail(e)


@main.command()
@click.argument("source")
@click.option("-l", "--language", help="Language (auto-detected from file extension, default python)")
@click.option("--keep-box", is_flag=True, help="Do not delete the box after the run")
@click.pass_obj
def run(client: IsolateSandbox, source: str, language: str | None, keep_box: bool) -> None:
    """Execute SOURCE and exit with the program's exit code.

    SOURCE is a file path, "-" for stdin, or inline code.
    """
    resolved_language = language or detect_language(source) or "python"
    request = ExecuteRequest(language=resolved_language, code=read_source(source))

    try:
        result = client.execute(request)
    except ApiError as e:
        fail(e)

    click.echo(result.stdout, nl=False)
    click.echo(result.stderr, nl=False, err=True)

    if keep_box:
        click.echo(f"box_id: {result.box_id}", err=True)
    else:
        try:
            client.cleanup_box(result.box_id)
        except ApiError as e:
            click.echo(f"Warning: failed to clean up box {result.box_id}: {e.message}", err=True)

    sys.exit(result.metadata.exit_code)


@main.command()
@click.argument("box_id", type=int)
@click.pass_obj
def files(client: IsolateSandbox, box_id: int) -> None:
    """List files in box BOX_ID."""
    try:
        for filename in client.list_box_files(box_id).files:
            click.echo(filename)
    except ApiError as e:
        fail(e)


@main.command()
@click.argument("box_id", type=int)
@click.argument("filename")
@click.option("--raw", is_flag=True, help="Print the base64 content as sent by the server")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write bytes to this path")
@click.pass_obj
def get(client: IsolateSandbox, box_id: int, filename: str, raw: bool, output: Path | None) -> None:
    """Fetch FILENAME from box BOX_ID."""
    try:
        if output is not None:
            written = client.download_box_file(box_id, filename, output)
            click.echo(str(written), err=True)
        elif raw:
            click.echo(client.get_box_file_raw(box_id, filename).content)
        else:
            click.echo(client.get_box_file(box_id, filename).content, nl=False)
    except ApiError as e:
        fail(e)
    except (UnicodeDecodeError, binascii.Error) as e:
        click.echo(click.style(f"Error: cannot decode {filename} as text: {e}", fg="red", bold=True), err=True)
        click.echo("  Use --raw to print the base64 content or -o PATH to save the bytes.", err=True)
        sys.exit(EXIT_API_ERROR)


@main.command()
@click.argument("box_id", type=int)
@click.pass_obj
def cleanup(client: IsolateSandbox, box_id: int) -> None:
    """Delete box BOX_ID."""
    try:
        click.echo(client.cleanup_box(box_id).message)
    except ApiError as e:
        fail(e)


if __name__ == "__main__":  # pragma: no cover
    main()
