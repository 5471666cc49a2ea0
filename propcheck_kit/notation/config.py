"""
NotationConfig value object for the notation serializer.

Provides the immutable rendering options with copy-on-write helpers.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class NotationConfig:
    """
    Immutable rendering options for the notation serializer.

    Attributes:
        prefer_object_initialization: Render an object initializer block even
            if a constructor matching the fields is available.
        include_parameter_names: Prefix constructor arguments with their names.
        include_full_type_names: Render module-qualified type names.
        skip_create_assignment: Do not emit the ``var data = `` prefix.
    """

    prefer_object_initialization: bool = False
    include_parameter_names: bool = False
    include_full_type_names: bool = False
    skip_create_assignment: bool = False

    @classmethod
    def default(cls) -> "NotationConfig":
        """Return the default configuration (all settings false)."""
        return cls()

    def with_(
        self,
        prefer_object_initialization: bool | None = None,
        include_parameter_names: bool | None = None,
        include_full_type_names: bool | None = None,
        skip_create_assignment: bool | None = None,
    ) -> "NotationConfig":
        """Return a new instance with the given settings; None keeps the current value."""
        overrides = {
            "prefer_object_initialization": prefer_object_initialization,
            "include_parameter_names": include_parameter_names,
            "include_full_type_names": include_full_type_names,
            "skip_create_assignment": skip_create_assignment,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def with_object_initialization(self) -> "NotationConfig":
        """Prefer object initialization even if a constructor for the type is available."""
        return self.with_(prefer_object_initialization=True)

    def with_parameter_names(self) -> "NotationConfig":
        """Include names for parameters in constructor invocations."""
        return self.with_(include_parameter_names=True)

    def with_full_type_names(self) -> "NotationConfig":
        """Include the module in rendered type names."""
        return self.with_(include_full_type_names=True)

    def without_create_assignment(self) -> "NotationConfig":
        """Do not create the ``var data = `` prefix for each serialized object."""
        return self.with_(skip_create_assignment=True)
