"""Flow tables and the registry that looks them up.

Two flows:
    - BRIEF_FLOW:       post a property (sell, rent, joint venture, shortlet)
    - PREFERENCE_FLOW:  describe what you are looking for

The FlowRegistry returns the definition for a FlowKind, the same way the
rest of the engine asks for it.
"""

from property_wizard.domain.enums import FlowKind
from property_wizard.rules.brief import BRIEF_FLOW
from property_wizard.rules.flow import FlowDefinition
from property_wizard.rules.preference import PREFERENCE_FLOW
from property_wizard.rules.steps import StepDescriptor, StepSpec, step_set


class FlowRegistry:
    """Registry of flow definitions keyed by FlowKind.

    Usage:
        flow = FlowRegistry.get(FlowKind.BRIEF)
        steps = flow.step_set(TransactionType.RENT)
    """

    _registry: dict[str, FlowDefinition] = {
        FlowKind.BRIEF.value: BRIEF_FLOW,
        FlowKind.PREFERENCE.value: PREFERENCE_FLOW,
    }

    @classmethod
    def get(cls, kind: FlowKind | str) -> FlowDefinition:
        """Return the flow definition for ``kind``.

        Raises:
            ValueError: If the kind is not registered.
        """
        flow = cls._registry.get(str(kind))
        if flow is None:
            supported = ", ".join(sorted(cls._registry))
            raise ValueError(f"Unknown flow '{kind}'. Supported flows: {supported}")
        return flow

    @classmethod
    def get_supported_kinds(cls) -> list[str]:
        return list(cls._registry.keys())


def get_flow(kind: FlowKind | str) -> FlowDefinition:
    return FlowRegistry.get(kind)


__all__ = [
    "BRIEF_FLOW",
    "PREFERENCE_FLOW",
    "FlowDefinition",
    "FlowRegistry",
    "StepDescriptor",
    "StepSpec",
    "get_flow",
    "step_set",
]
