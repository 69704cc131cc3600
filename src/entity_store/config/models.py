from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from entity_store.domain.query import TokenShape

# Config models map YAML sections to typed structures.


class StoreConfig(BaseModel):
    # Store backend selection; "eventual" delays visibility of writes.
    model_config = ConfigDict(extra="forbid")
    backend: Literal["memory", "eventual"] = "memory"
    visibility_delay_seconds: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class QueryConfig(BaseModel):
    # Token shape for OR queries; "compat" keeps the historical 0/9-only digits.
    model_config = ConfigDict(extra="forbid")
    token_shape: TokenShape = "compat"


class PollingConfig(BaseModel):
    # Waiter defaults used by batch helpers and CLI await commands.
    model_config = ConfigDict(extra="forbid")
    timeout_seconds: float = Field(default=10.0, gt=0, allow_inf_nan=False)
    poll_interval_seconds: float = Field(default=0.1, gt=0, allow_inf_nan=False)
    poll_delay_seconds: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class TraceSinkJsonlConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    flush_every_n: int = Field(default=1, ge=1)


class TraceSinkConfig(BaseModel):
    # Trace sink selector: only one sink is active at a time.
    model_config = ConfigDict(extra="forbid")
    kind: Literal["stdout", "jsonl"]
    jsonl: TraceSinkJsonlConfig | None = None

    @model_validator(mode="after")
    def _require_jsonl(self) -> TraceSinkConfig:
        # For jsonl kind, a jsonl section is required to avoid silent defaults.
        if self.kind == "jsonl" and self.jsonl is None:
            raise ValueError("tracing.sink.jsonl is required when kind is 'jsonl'")
        return self


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    sink: TraceSinkConfig | None = None


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    store: StoreConfig = Field(default_factory=StoreConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)
