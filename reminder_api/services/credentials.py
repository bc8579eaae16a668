"""
LINE channel credential registry and per-reservation credential selection.

Reservations name their LINE account in the `lineAccount` field. Airtable
lookup fields arrive as one-element lists, plain fields as strings;
normalize_account_label() flattens both before the registry is consulted.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from reminder_api.api.errors import ConfigurationError
from reminder_api.core.config import Settings

logger = logging.getLogger(__name__)

ACCOUNT_FIELD = "lineAccount"


@dataclass(frozen=True)
class CredentialRegistry:
    """Immutable mapping of account label -> LINE channel access token."""

    tokens: Mapping[str, str] = field(repr=False)
    default_label: str

    def __post_init__(self):
        if not self.tokens.get(self.default_label):
            raise ConfigurationError(
                f"No LINE channel access token configured for default account "
                f"'{self.default_label}'. Set LINE_CHANNEL_ACCESS_TOKEN or add the "
                f"label to LINE_CHANNEL_ACCESS_TOKENS."
            )
        object.__setattr__(self, "tokens", MappingProxyType(dict(self.tokens)))

    @property
    def labels(self) -> list[str]:
        return sorted(self.tokens)

    def resolve(self, label: str | None) -> tuple[str, str]:
        """
        Resolve a label to (label, token), falling back to the default account.

        Never raises: the default is guaranteed present at construction.
        """
        if label is not None and label in self.tokens:
            return label, self.tokens[label]
        if label is not None:
            logger.warning(f"Unknown LINE account '{label}' - using default '{self.default_label}'")
        return self.default_label, self.tokens[self.default_label]


def build_credential_registry(settings: Settings) -> CredentialRegistry:
    """
    Build the registry from settings.

    LINE_CHANNEL_ACCESS_TOKEN is registered under the default label unless
    LINE_CHANNEL_ACCESS_TOKENS already maps that label.
    """
    tokens = {
        label.strip(): token.strip()
        for label, token in settings.line_channel_access_tokens.items()
        if label.strip() and token and token.strip()
    }
    default_label = settings.line_default_account.strip()
    if default_label not in tokens and settings.line_channel_access_token:
        tokens[default_label] = settings.line_channel_access_token.strip()
    return CredentialRegistry(tokens=tokens, default_label=default_label)


def normalize_account_label(value: Any) -> str | None:
    """Flatten a scalar-or-sequence lineAccount value to a label, or None."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if not isinstance(value, str):
        return None
    return value.strip() or None


def select_credential(record: Mapping[str, Any], registry: CredentialRegistry) -> tuple[str, str]:
    """Pick (label, token) for a reservation record."""
    fields = record.get("fields") or {}
    label = normalize_account_label(fields.get(ACCOUNT_FIELD))
    return registry.resolve(label)
