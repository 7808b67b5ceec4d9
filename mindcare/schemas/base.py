from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase (the dashboards' shape); Python code uses snake_case. Both accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        """Shape written to the key-value store and returned over HTTP."""
        return self.model_dump(mode="json", by_alias=True)


class FrozenRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
