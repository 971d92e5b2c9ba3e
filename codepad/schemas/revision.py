"""Revision Schemas — validation for revision-store and package-index payloads.

Invariants:
    - Package.name is "author/project"; Package.version is exact semver X.Y.Z
    - Duplicate package names in one payload are rejected
    - to_domain() returns frozen core values only
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from codepad.core.domain_types import RevisionId
from codepad.core.workspace import Package, Revision


class PackagePayload(BaseModel):
    name: str = Field(pattern=r"^[A-Za-z0-9_-]+/[A-Za-z0-9_.-]+$")
    version: str = Field(pattern=r"^\d+\.\d+\.\d+$")

    def to_domain(self) -> Package:
        return Package(self.name, self.version)

    @classmethod
    def from_domain(cls, package: Package) -> "PackagePayload":
        return cls(name=package.name, version=package.version)


class RevisionPayload(BaseModel):
    """A persisted revision as returned by the store."""
    id: str = Field(pattern=r"^[A-Za-z0-9_-]{4,40}$")
    title: str = Field("", max_length=200)
    code: str
    markup: str = Field(validation_alias=AliasChoices("markup", "html"))
    packages: list[PackagePayload] = Field(default_factory=list)

    @field_validator("packages")
    @classmethod
    def unique_package_names(cls, v: list[PackagePayload]) -> list[PackagePayload]:
        names = [p.name for p in v]
        if len(names) != len(set(names)):
            raise ValueError("duplicate package names")
        return v

    def to_domain(self) -> Revision:
        return Revision(
            id=RevisionId(self.id),
            code=self.code,
            markup=self.markup,
            packages=tuple(p.to_domain() for p in self.packages),
            title=self.title.strip(),
        )


class PackageSearchPayload(BaseModel):
    """Hits pushed by the package index for one query."""
    packages: list[PackagePayload] = Field(default_factory=list)

    def to_domain(self) -> tuple[Package, ...]:
        return tuple(p.to_domain() for p in self.packages)
