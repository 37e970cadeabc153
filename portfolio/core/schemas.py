from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base des schémas d'entrée/sortie : camelCase sur le fil (`imageUrl`, `userId`...),
    snake_case côté Python. Les entrées acceptent les deux formes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str
