"""Pydantic schemas for the notification intake API."""

from typing import Union

from pydantic import BaseModel, Field

from opnotify.models import Information, LoggingLevel, NotificationConfig, ResourceRef


class ResourceIn(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the resource announcing the change")
    namespace: str = Field(..., min_length=1)

    def to_ref(self) -> ResourceRef:
        return ResourceRef(name=self.name, namespace=self.namespace)


class InformationIn(BaseModel):
    configuration_type: str = ""
    log_level: Union[LoggingLevel, str] = LoggingLevel.INFO
    message: str = Field(..., description="Short status message")
    message_verbose: str = ""

    def to_information(self, resource: ResourceIn) -> Information:
        return Information(
            configuration_type=self.configuration_type,
            namespace=resource.namespace,
            cr_name=resource.name,
            log_level=self.log_level,
            message=self.message,
            message_verbose=self.message_verbose,
        )


class NotificationCreate(BaseModel):
    resource: ResourceIn
    notification: NotificationConfig
    information: InformationIn


class NotificationAccepted(BaseModel):
    backend: Union[str, None] = Field(None, description="Backend the notification will go through")
    pending: int
