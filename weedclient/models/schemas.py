# weedclient/models/schemas.py
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class Location(BaseModel):
    """Address of one storage node, as reported by the master"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    public_url: str = Field(alias="publicUrl")
    url: str


class FileHandle(BaseModel):
    """A stored file: the master's fid plus an optional version suffix"""

    model_config = ConfigDict(frozen=True)

    fid: str
    version: int = 0

    @property
    def path(self) -> str:
        if self.version > 0:
            return f"{self.fid}_{self.version}"
        return self.fid

    @property
    def volume_id(self) -> int:
        """Volume id encoded before the comma, e.g. ``3`` for ``3,01637037d6``"""
        head = self.fid.split(",", 1)[0]
        try:
            return int(head)
        except ValueError:
            raise ValueError(f"Cannot read a volume id from fid {self.fid!r}") from None


class ReplicationStrategy(str, Enum):
    NONE = "000"
    TWICE_ON_SAME_RACK = "001"
    TWICE_ON_DIFFERENT_RACK = "010"
    TWICE_ON_DIFFERENT_DATA_CENTER = "100"
    THRICE_ON_DIFFERENT_DATA_CENTER = "200"
    THRICE_ON_DIFFERENT_RACK_AND_DATA_CENTER = "110"


class AssignParams(BaseModel):
    count: int = Field(default=1, ge=1)
    replication: Optional[ReplicationStrategy] = None
    collection: Optional[str] = None

    def query_params(self) -> Dict[str, str]:
        """Only the parameters the caller actually asked for"""
        params = {}
        if self.count > 1:
            params["count"] = str(self.count)
        if self.replication is not None:
            params["replication"] = self.replication.value
        if self.collection is not None:
            params["collection"] = self.collection
        return params


# Error bodies from the store are just {"error": "..."}, so every other
# field is optional and only enforced when no error was reported.


class AssignResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    fid: Optional[str] = None
    url: Optional[str] = None
    public_url: Optional[str] = Field(default=None, alias="publicUrl")
    count: int = 0
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_assigned(self) -> "AssignResult":
        if not self.error and (not self.fid or self.url is None):
            raise ValueError("assign response carries neither a fid nor an error")
        return self


class Assignation(BaseModel):
    model_config = ConfigDict(frozen=True)

    fid: str
    primary_location: Location
    replica_count: int

    @classmethod
    def from_result(cls, result: AssignResult) -> "Assignation":
        return cls(
            fid=result.fid,
            primary_location=Location(
                public_url=result.public_url or result.url, url=result.url
            ),
            replica_count=result.count,
        )

    @property
    def file(self) -> FileHandle:
        return FileHandle(fid=self.fid)


class LookupResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    volume_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("volumeId", "volumeOrFileId")
    )
    locations: List[Location] = Field(default_factory=list)
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_locations(self) -> "LookupResult":
        if not self.error and not self.locations:
            raise ValueError("lookup response carries neither locations nor an error")
        return self


class WriteResult(BaseModel):
    size: Optional[int] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_size(self) -> "WriteResult":
        if not self.error and self.size is None:
            raise ValueError("write response carries neither a size nor an error")
        return self


class MasterStatus(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: Optional[str] = Field(default=None, alias="Version")
    topology: Optional[Dict[str, Any]] = Field(default=None, alias="Topology")


class VolumeStatus(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: Optional[str] = Field(default=None, alias="Version")
    volumes: Optional[List[Dict[str, Any]]] = Field(default=None, alias="Volumes")
