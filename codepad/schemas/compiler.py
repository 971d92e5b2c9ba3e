"""Compiler Schemas — validation for compile-finished events.

Invariants:
    - Regions are 1-based and never end before they start
    - An absent or empty error list means the compile succeeded
"""

from pydantic import BaseModel, Field, model_validator

from codepad.core.compilation import CompileError, Region


class RegionPayload(BaseModel):
    start_line: int = Field(ge=1)
    start_column: int = Field(ge=1)
    end_line: int = Field(ge=1)
    end_column: int = Field(ge=1)

    @model_validator(mode="after")
    def check_ordered(self) -> "RegionPayload":
        if (self.end_line, self.end_column) < (self.start_line, self.start_column):
            raise ValueError("region ends before it starts")
        return self


class CompileErrorPayload(BaseModel):
    title: str
    message: str
    region: RegionPayload | None = None
    module: str | None = None

    def to_domain(self) -> CompileError:
        region = None
        if self.region is not None:
            region = Region(
                self.region.start_line, self.region.start_column,
                self.region.end_line, self.region.end_column,
            )
        return CompileError(
            title=self.title, message=self.message,
            region=region, module=self.module,
        )


class CompileResultPayload(BaseModel):
    errors: list[CompileErrorPayload] = Field(default_factory=list)

    def to_domain(self) -> tuple[CompileError, ...]:
        return tuple(e.to_domain() for e in self.errors)
