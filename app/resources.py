"""
Catalog API — Resource Wrappers
=================================

What:  Adapters that expose a single record (JsonResource) or a list / page of
       records (ResourceCollection) in a serializable shape.
How:   A JsonResource subclass names a Pydantic schema; resolve() validates the
       wrapped object through it (from_attributes) and dumps JSON-safe data.
       A ResourceCollection resolves every item with its resource class and
       keeps the original list or paginator in `.resource`, so the response
       builder can read pagination metadata from it.
Who:   Route handlers wrap service results before handing them to
       ok_response()/created_response().

Example:
    return ok_response(ProductResource(product))
    return ok_response(ProductResource.collection(paginator))
"""

from typing import Any, ClassVar, Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel

from app.pagination import LengthAwarePaginator
from app.schemas.product import ProductResponse


class JsonResource:
    """
    Wraps one record for output.

    Subclasses set `schema`; without one, dicts and Pydantic models are
    dumped as they are and any other object falls back to its public
    attributes.
    """

    schema: ClassVar[Optional[Type[BaseModel]]] = None

    def __init__(self, resource: Any):
        self.resource = resource

    def to_dict(self) -> Dict[str, Any]:
        resource = self.resource
        if self.schema is not None:
            return self.schema.model_validate(resource).model_dump(mode="json")
        if isinstance(resource, BaseModel):
            return resource.model_dump(mode="json")
        if isinstance(resource, dict):
            return dict(resource)
        return {
            key: value
            for key, value in vars(resource).items()
            if not key.startswith("_")
        }

    def resolve(self) -> Optional[Dict[str, Any]]:
        """Plain-structure form of the wrapped record (None stays None)."""
        if self.resource is None:
            return None
        return self.to_dict()

    @classmethod
    def collection(
        cls, resource: Union[Iterable[Any], LengthAwarePaginator]
    ) -> "ResourceCollection":
        return ResourceCollection(resource, resource_class=cls)


class ResourceCollection:
    """
    Wraps a list or a LengthAwarePaginator of records.

    Attributes:
        resource:   The original list or paginator (pagination metadata source)
        collection: Items resolved through `resource_class`
    """

    def __init__(
        self,
        resource: Union[Iterable[Any], LengthAwarePaginator],
        resource_class: Type[JsonResource] = JsonResource,
    ):
        self.resource = resource
        self.resource_class = resource_class
        items = resource.items if isinstance(resource, LengthAwarePaginator) else resource
        self.collection: List[Any] = [
            resource_class(item).resolve() for item in items
        ]

    def resolve(self) -> List[Any]:
        return list(self.collection)

    def __len__(self) -> int:
        return len(self.collection)


class ProductResource(JsonResource):
    """Product record as exposed by the API (see ProductResponse)."""

    schema = ProductResponse
