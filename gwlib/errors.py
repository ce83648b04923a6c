# gwlib/errors.py


class GitWorkError(Exception):
    """Base class for every failure reported to the user."""


class PreconditionError(GitWorkError):
    """Raised before any mutation when the layout is not what the command expects."""


class StepError(GitWorkError):
    """A filesystem step of a multi-step operation failed."""


class GitCommandError(GitWorkError):
    """A git invocation failed; carries git's own trimmed output."""

    def __init__(self, step, output):
        self.step = step
        self.output = output
        super().__init__(f"{step}: {output}" if output else step)


class AmbiguousMatchError(GitWorkError):
    def __init__(self, token, candidates):
        self.token = token
        self.candidates = list(candidates)
        listing = "\n".join(f"  {c}" for c in self.candidates)
        super().__init__(f"ambiguous match for '{token}':\n{listing}")


class NoMatchError(GitWorkError):
    pass


class HookError(GitWorkError):
    """The post-creation hook failed and the new worktree was rolled back."""


class AbortedError(GitWorkError):
    def __init__(self, message="aborted"):
        super().__init__(message)
