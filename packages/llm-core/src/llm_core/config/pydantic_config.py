"""Pydantic base model shared by llm_core and gendoc."""

from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """Base for gendoc's settings, project and progress models.

    Assignments are validated, so a status or config value set after
    construction (``article.status = ...``, ``config set``) is checked the
    same way as loaded data. Enums stay enum members rather than their values.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=False,
        validate_default=True,
    )
