"""Shell command safety utilities."""

from collections.abc import Sequence


def escape_shell_arg(arg: str) -> str:
    """Quote a single argument so a POSIX shell reads it as one word.

    Every ``'`` becomes ``'\\''`` and the result is wrapped in single
    quotes. Unlike ``shlex.quote`` the argument is always quoted, even when
    it contains no special characters.

    Args:
        arg: Argument to quote (must not contain NUL)

    Returns:
        Shell-safe quoted argument
    """
    return "'" + arg.replace("'", "'\\''") + "'"


def build_command(command: str, args: Sequence[str] | None = None) -> str:
    """Append individually quoted arguments to a base command.

    ``args=None`` returns ``command`` unchanged; any sequence (even an
    empty one) appends a single space followed by the quoted arguments.

    Args:
        command: Base command line, used verbatim
        args: Arguments to quote and append

    Returns:
        Full command line
    """
    if args is None:
        return command
    safe_args = [escape_shell_arg(arg) for arg in args]
    return f"{command} {' '.join(safe_args)}"
