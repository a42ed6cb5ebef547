"""
Discriminator collection.

Runs once over all named shapes before any declaration is emitted and
maps each variant shape of a discriminated oneOf/anyOf to the property
and literal value that identify it.
"""

from __future__ import annotations

from ..errors import DiscriminatorConflictError
from ..schema_ast.nodes import CompositionNode, NamedShape
from .context import DiscriminatorInfo
from .reference_resolver import ReferenceResolver


def _mapping_target_name(target: str, resolver: ReferenceResolver) -> str:
    """Mapping values are either full pointers or bare shape names."""
    if target.startswith("#") or "/" in target:
        return resolver.ref_name(target)
    return target


def collect_discriminators(shapes: list[NamedShape], resolver: ReferenceResolver) -> dict[str, DiscriminatorInfo]:
    """
    Build the variant name -> DiscriminatorInfo map.

    Args:
        shapes: Named shapes in document order
        resolver: Resolver for the document

    Returns:
        Map keyed by variant shape name

    Raises:
        DiscriminatorConflictError: If two compositions assign different
            discriminators to the same variant
    """
    result: dict[str, DiscriminatorInfo] = {}
    claimed_by: dict[str, str] = {}

    for shape in shapes:
        node = shape.node
        if not isinstance(node, CompositionNode) or node.kind == "allOf" or node.discriminator is None:
            continue

        discriminator = node.discriminator
        mapped = [(value, _mapping_target_name(target, resolver)) for value, target in discriminator.mapping.items()]

        for member in node.references:
            variant = resolver.ref_name(member.ref_path)
            literal = next((value for value, target in mapped if target == variant), variant.lower())
            info = DiscriminatorInfo(property_name=discriminator.property_name, literal_value=str(literal))

            existing = result.get(variant)
            if existing is not None and existing != info:
                raise DiscriminatorConflictError(
                    f"Shape '{variant}' is claimed by discriminated unions '{claimed_by[variant]}' "
                    f"({existing.property_name}='{existing.literal_value}') and '{shape.name}' "
                    f"({info.property_name}='{info.literal_value}')",
                    "Give each variant a single discriminator value, or wrap it in a separate shape per union",
                )
            result[variant] = info
            claimed_by.setdefault(variant, shape.name)

    return result
