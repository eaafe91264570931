"""Immutable application metadata snapshots."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apps.descriptor import ApplicationDescriptor, ApplicationToken


class RemoteMetadata(BaseModel):
    """Metadata record fetched from a remote application instance."""

    name: str
    display_name: str = ""
    icons: list[str] = Field(default_factory=list)
    no_main_window: bool = False
    headless: bool = False

    @field_validator("icons", mode="before")
    @classmethod
    def _none_icons(cls, value: Any) -> Any:
        return [] if value is None else value


class ApplicationInfo(BaseModel):
    """Public snapshot of an application's identity and presentation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    display_name: str = ""
    icons: tuple[str, ...] = ()
    headless: bool = False
    token: ApplicationToken | None = None

    @classmethod
    def from_descriptor(cls, descriptor: ApplicationDescriptor) -> ApplicationInfo:
        return cls(
            name=descriptor.name,
            display_name=descriptor.display_name,
            icons=tuple(descriptor.icons or ()),
            headless=descriptor.headless,
            token=descriptor.token,
        )

    @classmethod
    def from_record(
        cls,
        record: RemoteMetadata,
        token: ApplicationToken | None = None,
    ) -> ApplicationInfo:
        """Project a remote metadata record, which has no local descriptor of its own."""
        return cls(
            name=record.name,
            display_name=record.display_name,
            icons=tuple(record.icons or ()),
            headless=record.headless,
            token=token,
        )
