"""Errors raised by the render entry point and the dispatch strategies.

Every error derives from RendererError so callers can catch the whole family
at once. Precondition failures additionally derive from ValueError and
compute failures from RuntimeError.

    RendererError
    ├── InvalidParameterError   zero samples or depth, bad worker count
    ├── BufferSizeError         bad dimensions or output buffer
    ├── InvalidSceneError       empty scene or unusable camera
    └── ComputeError
        ├── ThreadPanickedError a worker raised
        └── CommunicationError  the result channel closed early
"""


class RendererError(Exception):
    """Base class for all render failures."""


class InvalidParameterError(RendererError, ValueError):
    """A render parameter is outside its valid range."""


class BufferSizeError(RendererError, ValueError):
    """The image dimensions or the output buffer do not fit together."""


class InvalidSceneError(RendererError, ValueError):
    """The scene cannot be rendered."""


class ComputeError(RendererError, RuntimeError):
    """Rendering started but did not complete.

    The output buffer contents are undefined after this error.
    """


class ThreadPanickedError(ComputeError):
    """A render worker raised an exception.

    The worker's exception is chained as ``__cause__``.
    """


class CommunicationError(ComputeError):
    """The result channel closed before every pixel was delivered."""
