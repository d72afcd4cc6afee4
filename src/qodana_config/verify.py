"""Cross-layer consistency checks for a resolved configuration."""

import logging

from .exceptions import IdentityMismatchError
from .messages import error_message
from .models import LayeredConfig
from .qdyaml import load_identity

logger = logging.getLogger(__name__)


def verify_identity_matches_local(config: LayeredConfig, local_config_display_path: str) -> None:
    """Check that the local configuration declares the effective ide/linter.

    An ide or linter can be set by a file pulled in through ``imports``, but
    the analysis needs it declared in the root configuration too. Values are
    compared as exact strings, ide first, then linter.

    Diagnostics are printed before raising, so callers only decide whether
    to abort.

    Args:
        config: Resolved configuration to check
        local_config_display_path: Local configuration path shown to the user

    Raises:
        IdentityMismatchError: On the first field that differs
    """
    effective = config.effective_identity
    if effective.is_empty:
        return
    if config.local_echo_path is None:
        logger.debug("No local configuration echoed by the resolver, skipping identity check")
        return

    local = load_identity(config.local_echo_path)
    for name in ("ide", "linter"):
        effective_value = getattr(effective, name)
        local_value = getattr(local, name)
        if effective_value != local_value:
            error_message(
                f"'{name}: {effective_value}' is specified in one of files provided by 'imports' "
                f"from {local_config_display_path} '{name}' is required in root qodana.yaml"
            )
            error_message(f"Add `{name}: {effective_value}` to {local_config_display_path}")
            raise IdentityMismatchError(name, effective_value, local_value)
