from abc import ABC, abstractmethod


class BaseWorkflow[T_Request, T_Result](ABC):
    """Abstract base for all deterministic workflow pipelines."""

    @abstractmethod
    async def execute(self, request: T_Request) -> T_Result:
        """Run the full workflow pipeline for the given request."""
