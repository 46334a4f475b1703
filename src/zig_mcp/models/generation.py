"""
Generation input models.

Explicit records for code generation requirements, optimization levels and
build configuration. Replace loosely typed option bags so templates can
read named fields directly.
"""

from dataclasses import dataclass, field
from enum import Enum


class OptimizationLevel(Enum):
    """Zig optimization modes.

    Exactly four members. Anything else is either rejected by the caller or
    replaced by a default through ``parse``; no hybrid value exists.
    """

    DEBUG = "Debug"
    RELEASE_SAFE = "ReleaseSafe"
    RELEASE_FAST = "ReleaseFast"
    RELEASE_SMALL = "ReleaseSmall"

    @classmethod
    def parse(
        cls, value: object, default: "OptimizationLevel | None" = None
    ) -> "OptimizationLevel":
        """Resolve a user supplied mode name.

        Matches the exact Zig spelling (``ReleaseFast``). Unknown names,
        non-strings and None resolve to ``default``.

        Args:
            value: Raw value from the tool argument bag.
            default: Fallback member. Defaults to RELEASE_SAFE.

        Returns:
            Matching OptimizationLevel or the default.

        Raises:
            No exceptions - unknown values fall back to the default.

        Example:
            >>> OptimizationLevel.parse("ReleaseFast")
            <OptimizationLevel.RELEASE_FAST: 'ReleaseFast'>
            >>> OptimizationLevel.parse("Turbo")
            <OptimizationLevel.RELEASE_SAFE: 'ReleaseSafe'>
        """
        fallback = default or cls.RELEASE_SAFE
        if not isinstance(value, str):
            return fallback
        for member in cls:
            if member.value == value:
                return member
        return fallback

    @classmethod
    def names(cls) -> list[str]:
        """Zig spellings of all members, in declaration order."""
        return [member.value for member in cls]


@dataclass(frozen=True)
class GenerationRequirements:
    """Parsed intent of a generate_code request.

    Attributes:
        features: Feature keywords found in the prompt (create, struct, ...)
        error_handling: Prompt mentions error handling
        testing: Prompt mentions tests or verification
        performance: Prompt mentions speed or optimization
    """

    features: frozenset[str] = frozenset()
    error_handling: bool = False
    testing: bool = False
    performance: bool = False

    def has_feature(self, feature: str) -> bool:
        """True if ``feature`` was requested."""
        return feature in self.features


@dataclass(frozen=True)
class ZigDependency:
    """A package entry for build.zig.zon.

    Attributes:
        name: Dependency name, used as the .zon field name
        url: Tarball or repository URL; empty for a placeholder
        path: Root source file inside the package
        version: Branch or tag the catalogue points at
        hash: Package hash; zig fetch prints the real one
    """

    name: str
    url: str = ""
    path: str = ""
    version: str = ""
    hash: str = "1220" + "0" * 60

    def resolved_url(self) -> str:
        """URL to embed, falling back to a placeholder repository."""
        return self.url or f"https://github.com/example/{self.name}"

    def to_dict(self) -> dict[str, str]:
        """Serialize to the JSON shape of the dependency catalogue."""
        return {
            "name": self.name,
            "url": self.url,
            "path": self.path,
            "version": self.version,
        }


@dataclass
class BuildConfig:
    """Parameters for generating a build.zig script.

    Attributes:
        zig_version: Zig version noted in the header comment
        optimization_level: Preferred optimize mode for standardOptimizeOption
        target_triple: Optional cross-compilation hint
        dependencies: Mapping of dependency name to source locator
        build_steps: Additional named build steps to declare
    """

    zig_version: str = "0.12.0"
    optimization_level: OptimizationLevel = OptimizationLevel.RELEASE_SAFE
    target_triple: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    build_steps: list[str] = field(default_factory=list)
