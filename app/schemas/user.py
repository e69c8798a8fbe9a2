from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from app.validation import FieldSpec, Schema


class CreateUserRequest(BaseModel):
    """Registration payload.

    Binding only checks types; field rules live in ``validation_schema`` and
    are applied by the injected validator so every violation is reported.
    """

    username: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)

    validation_schema: ClassVar[Schema] = Schema(
        FieldSpec.of("username", "required,username"),
        FieldSpec.of("email", "required,email"),
        FieldSpec.of("password", "required,password"),
    )


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
