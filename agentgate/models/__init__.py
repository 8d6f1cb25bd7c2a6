from .fragment import (
    Fragment,
    FragmentKind,
    FragmentWrite,
    MessageRole,
    SessionSnapshot,
    StagedMessage,
)
from .provider import PROVIDER_LABELS, PROVIDER_SLUGS, ProviderKind, resolve_provider
from .workspace import WorkspaceFile, WorkspaceRequest, WorkspaceState

__all__ = [
    "Fragment",
    "FragmentKind",
    "FragmentWrite",
    "MessageRole",
    "PROVIDER_LABELS",
    "PROVIDER_SLUGS",
    "ProviderKind",
    "SessionSnapshot",
    "StagedMessage",
    "WorkspaceFile",
    "WorkspaceRequest",
    "WorkspaceState",
    "resolve_provider",
]
