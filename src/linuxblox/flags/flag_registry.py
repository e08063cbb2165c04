"""
Flag registry defining all flags the launcher manages.

This module defines every known Sober flag, its description, kind and
default state, and provides the mutation API the presentation layer uses.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from .flag_descriptor import FlagDescriptor, FlagKind, FlagValue, check_value_type

logger = logging.getLogger(__name__)

FlagListener = Callable[[FlagDescriptor], None]

_T = FlagKind.TOGGLE
_I = FlagKind.INPUT


class UnknownFlagError(ValueError):
    """Raised when a flag name is not part of the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown flag: {name}")
        self.name = name


class FlagRegistry:
    """
    Ordered collection of flag descriptors with change notification.

    Descriptors are mutated in place. Order matters only for presentation.
    """

    # (category, name, description, kind, enabled, value)
    _FLAG_DEFINITIONS: Tuple[Tuple[str, str, str, FlagKind, bool, FlagValue], ...] = (
        # Core
        ("core", "DFIntTaskSchedulerTargetFps", "FPS Limit", _I, True, "144"),
        ("core", "FFlagTaskSchedulerLimitTargetFpsTo2402", "Cap the FPS limit at 240", _T, False, False),
        # Rendering backend
        ("rendering", "FFlagDebugGraphicsPreferVulkan", "Prefer Vulkan Renderer", _T, True, True),
        ("rendering", "FFlagDebugGraphicsPreferOpenGL", "Prefer OpenGL Renderer", _T, False, False),
        # Lighting technology
        ("lighting", "DFFlagDebugRenderForceTechnologyVoxel", "Force Voxel lighting", _T, False, False),
        ("lighting", "FFlagDebugForceFutureIsBrightPhase2", "Force ShadowMap lighting", _T, False, False),
        ("lighting", "FFlagDebugForceFutureIsBrightPhase3", "Force Future lighting", _T, False, False),
        # Graphics quality
        ("graphics", "FFlagDebugGraphicsDisablePostFX", "Disable Post-Processing Effects", _T, True, False),
        ("graphics", "DFIntPostEffectQualityLevel", "Post Effect Quality (0-4)", _I, True, "4"),
        ("graphics", "FIntDebugForceMSAASamples", "Force MSAA samples (0, 1, 2, 4 or 8)", _I, False, "4"),
        ("graphics", "DFIntDebugFRMQualityLevelOverride", "Graphics quality level override (1-21)", _I, False, "21"),
        # Menu / UX
        (
            "menu",
            "DFIntCanHideGuiGroupId",
            "Set to a Group ID to enable visibility toggles (Ctrl+Shift+G, etc). Set to 0 to disable.",
            _I,
            True,
            "0",
        ),
        ("menu", "FFlagDisableNewIGMinDUA", "Disable New In-Game Menu (Reverts to Old Menu)", _T, True, False),
        ("menu", "FFlagEnableInGameMenuControls", "Enable 'Controls' Button in In-Game Menu", _T, True, False),
        # Telemetry / UI
        ("telemetry", "FFlagDebugDisplayFPS", "Show the FPS counter", _T, False, False),
        ("telemetry", "FFlagDebugDisableTelemetryEphemeralCounter", "Disable ephemeral telemetry counters", _T, False, True),
        ("telemetry", "FFlagDebugDisableTelemetryV2Stat", "Disable V2 telemetry stats", _T, False, True),
    )

    def __init__(self, descriptors: Iterable[FlagDescriptor]):
        self._descriptors: List[FlagDescriptor] = []
        self._by_name: Dict[str, FlagDescriptor] = {}
        self._listeners: List[FlagListener] = []
        for descriptor in descriptors:
            if descriptor.name in self._by_name:
                raise ValueError(f"Duplicate flag name: {descriptor.name}")
            self._descriptors.append(descriptor)
            self._by_name[descriptor.name] = descriptor

    @classmethod
    def default(cls) -> "FlagRegistry":
        """Build a fresh registry from the hardcoded flag definitions."""
        return cls(
            FlagDescriptor(
                name=name,
                description=description,
                kind=kind,
                enabled=enabled,
                value=value,
                category=category,
            )
            for category, name, description, kind, enabled, value in cls._FLAG_DEFINITIONS
        )

    def __iter__(self) -> Iterator[FlagDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> List[str]:
        return [descriptor.name for descriptor in self._descriptors]

    def get(self, name: str) -> FlagDescriptor:
        """Return the live descriptor for ``name``."""
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownFlagError(name) from None

    def snapshot(self) -> List[FlagDescriptor]:
        """Detached copies of all descriptors, in registry order."""
        return [replace(descriptor) for descriptor in self._descriptors]

    def enabled(self) -> List[FlagDescriptor]:
        return [descriptor for descriptor in self._descriptors if descriptor.enabled]

    # Mutation API

    def set_enabled(self, name: str, enabled: bool) -> FlagDescriptor:
        descriptor = self.get(name)
        if not isinstance(enabled, bool):
            raise TypeError(f"enabled must be a bool, got {type(enabled).__name__}")
        if descriptor.enabled != enabled:
            descriptor.enabled = enabled
            logger.debug(f"Flag {name} {'enabled' if enabled else 'disabled'}")
            self._notify(descriptor)
        return descriptor

    def set_value(self, name: str, value: FlagValue) -> FlagDescriptor:
        descriptor = self.get(name)
        check_value_type(descriptor.kind, name, value)
        if descriptor.value != value:
            descriptor.value = value
            logger.debug(f"Flag {name} set to {value!r}")
            self._notify(descriptor)
        return descriptor

    # Change notification

    def subscribe(self, listener: FlagListener) -> Callable[[], None]:
        """
        Register ``listener`` to be called after each state change.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify_all(self) -> None:
        """Emit a change event for every descriptor (after a reload)."""
        for descriptor in self._descriptors:
            self._notify(descriptor)

    def _notify(self, descriptor: FlagDescriptor) -> None:
        for listener in list(self._listeners):
            try:
                listener(descriptor)
            except Exception as e:
                logger.warning(f"Flag listener {listener!r} failed for {descriptor.name}: {e}")
