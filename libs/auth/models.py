from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Claims carried by a shop access token.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="sub")
    is_admin: bool = False
