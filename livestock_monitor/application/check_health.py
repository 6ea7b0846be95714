from __future__ import annotations

from dataclasses import dataclass

from ..infrastructure.livestock_api import LivestockApiClient


@dataclass(frozen=True)
class ServiceHealth:
    status: str
    model: str
    input_name: str
    input_shape: tuple[int | str, ...]
    output_shapes: tuple[tuple[str, tuple[int | str, ...]], ...]

    def describe(self) -> str:
        outputs = ", ".join(f"{name}{list(shape)}" for name, shape in self.output_shapes)
        return (
            f"status={self.status} model={self.model} "
            f"input={self.input_name}{list(self.input_shape)} outputs=[{outputs}]"
        )


class CheckServiceHealthUseCase:
    def __init__(self, api: LivestockApiClient, logger) -> None:
        self._api = api
        self._logger = logger

    async def execute(self) -> ServiceHealth:
        response = await self._api.check_health()
        health = ServiceHealth(
            status=response.status,
            model=response.model,
            input_name=response.input.name,
            input_shape=tuple(response.input.shape),
            output_shapes=tuple((output.name, tuple(output.shape)) for output in response.outputs),
        )
        self._logger.info("service.health", status=health.status, model=health.model)
        return health


__all__ = ["CheckServiceHealthUseCase", "ServiceHealth"]
