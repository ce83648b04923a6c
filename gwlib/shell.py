# gwlib/shell.py
"""Shell wrapper that turns a printed directory into a `cd`.

The CLI prints a path on stdout when the user should switch directories;
the `gw` function evaluates the command and changes into that path.
"""
from gwlib.errors import PreconditionError

SUPPORTED_SHELLS = ("bash", "zsh", "fish")

_POSIX = """\
gw() {
  local output
  output=$(command git-work "$@")
  local exit_code=$?

  if [ $exit_code -eq 0 ] && [ -d "$output" ]; then
    cd "$output" || return
  elif [ $exit_code -eq 0 ] && [ -n "$output" ]; then
    echo "$output"
  elif [ -n "$output" ]; then
    echo "$output" >&2
    return $exit_code
  else
    return $exit_code
  fi
}
"""

_FISH = """\
function gw
    set -l output (command git-work $argv)
    set -l exit_code $status

    if test $exit_code -eq 0; and test -d "$output"
        cd $output
    else if test $exit_code -eq 0; and test -n "$output"
        printf '%s\\n' $output
    else if test -n "$output"
        printf '%s\\n' $output >&2
        return $exit_code
    else
        return $exit_code
    end
end
"""


def shell_snippet(shell):
    if shell in ("bash", "zsh"):
        return _POSIX
    if shell == "fish":
        return _FISH
    raise PreconditionError(
        f"unsupported shell '{shell}' (supported: {', '.join(SUPPORTED_SHELLS)})"
    )
