"""
Feature flag registry for the causal dashboard.

Controls runtime behavior switches that change how the core treats
imported data and large particle fields.
Default: strict import OFF (permissive snapshot import preserved).

Usage:
    from causal_dashboard.config.feature_flags import FeatureFlags

    if FeatureFlags.STRICT_SNAPSHOT_IMPORT:
        # reject shape-malformed snapshots
    else:
        # accept them and log the problems
"""


class FeatureFlags:
    """
    Global feature flag registry.

    Flags are class attributes toggled at runtime; `legacy_mode()` restores
    the documented defaults.
    """

    STRICT_SNAPSHOT_IMPORT = False
    """
    Reject snapshot imports whose recognized fields fail schema validation.

    When False (default):
    - Any well-formed JSON object is merged, slice by slice
    - Shape problems are logged as warnings only

    When True:
    - The validation report is checked before merging
    - Any issue raises SnapshotValidationError and nothing is merged
    """

    WARN_ON_LARGE_PARTICLE_FIELD = True
    """
    Log a warning when the particle count exceeds the configured threshold.

    Link derivation is a pairwise scan with no spatial index, so its cost
    grows quadratically with the particle count.
    """

    # --- Class Methods for Safe Flag Management ---

    @classmethod
    def enable_strict_import(cls):
        cls.STRICT_SNAPSHOT_IMPORT = True

    @classmethod
    def disable_strict_import(cls):
        cls.STRICT_SNAPSHOT_IMPORT = False

    @classmethod
    def legacy_mode(cls):
        """Reset all flags to their defaults."""
        cls.STRICT_SNAPSHOT_IMPORT = False
        cls.WARN_ON_LARGE_PARTICLE_FIELD = True

    @classmethod
    def validate(cls) -> bool:
        """
        Returns:
            True if every flag holds a boolean.

        Raises:
            ValueError if a flag was overwritten with a non-boolean value.
        """
        for name in ("STRICT_SNAPSHOT_IMPORT", "WARN_ON_LARGE_PARTICLE_FIELD"):
            if not isinstance(getattr(cls, name), bool):
                raise ValueError(f"Invalid flag value: {name} must be a bool")
        return True
