"""
Service for picking a variant from attribute selections in the storefront.
Dependencies are INFERRED from actual variant data, not configured manually.
"""

from typing import Any, Dict, List, Optional

from apps.products.choices import ProductStatus
from apps.products.models import Product, Variant


class VariantSelectionService:
    """
    Service to resolve attribute selections to variants.
    Only published, non-archived variants are considered.
    """

    @staticmethod
    def get_visible_variants(product: Product) -> List[Variant]:
        return list(
            product.variants.filter(published=True).exclude(status=ProductStatus.ARCHIVED)
        )

    @staticmethod
    def get_attribute_names(variants: List[Variant]) -> List[str]:
        """Attribute names in the order they first appear on the variants."""
        names = []
        seen = set()
        for variant in variants:
            for name in (variant.attributes or {}):
                if name.lower() not in seen:
                    seen.add(name.lower())
                    names.append(name)
        return names

    @staticmethod
    def _matches(variant: Variant, selections: Dict[str, str]) -> bool:
        return all(
            variant.get_option_value(name) == value
            for name, value in selections.items()
        )

    @staticmethod
    def get_available_options_for_selection(
        product: Product,
        current_selections: Dict[str, str],
        target_attribute: str,
        variants: Optional[List[Variant]] = None
    ) -> List[str]:
        """
        Given current selections, return which values are available for the target attribute.

        Example:
            current_selections = {'size': 'XL'}
            target_attribute = 'color'
            -> Returns only ['Black'] because size XL only exists in Black
        """
        if variants is None:
            variants = VariantSelectionService.get_visible_variants(product)

        other_selections = {
            name: value for name, value in current_selections.items()
            if name.lower() != target_attribute.lower()
        }

        values = []
        for variant in variants:
            if not VariantSelectionService._matches(variant, other_selections):
                continue
            value = variant.get_option_value(target_attribute)
            if value is not None and value not in values:
                values.append(value)
        return values

    @staticmethod
    def get_all_available_options(
        product: Product,
        current_selections: Dict[str, str]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Get the available values for each attribute, given current selections.

        Returns:
            Dict with attribute names as keys and the available options as values
        """
        variants = VariantSelectionService.get_visible_variants(product)
        selections = {name.lower(): value for name, value in current_selections.items()}

        result = {}
        for name in VariantSelectionService.get_attribute_names(variants):
            available = VariantSelectionService.get_available_options_for_selection(
                product, current_selections, name, variants=variants
            )
            current_value = selections.get(name.lower())
            result[name] = {
                'name': name,
                'options': [
                    {
                        'value': value,
                        'is_selected': value == current_value,
                    }
                    for value in available
                ],
            }
        return result

    @staticmethod
    def find_best_matching_variant(
        product: Product,
        attribute_selections: Dict[str, str]
    ) -> Optional[Variant]:
        """
        Find the single variant that best matches the given selections.

        Exact matches win; otherwise the variant sharing the most attribute
        values, preferring sellable variants on ties.
        """
        variants = VariantSelectionService.get_visible_variants(product)
        if not variants:
            return None
        if not attribute_selections:
            return next((v for v in variants if v.is_sellable), variants[0])

        for variant in variants:
            if VariantSelectionService._matches(variant, attribute_selections):
                return variant

        best_variant = None
        best_score = (0, False)
        for variant in variants:
            score = sum(
                1 for name, value in attribute_selections.items()
                if variant.get_option_value(name) == value
            )
            rank = (score, variant.is_sellable)
            if rank > best_score:
                best_score = rank
                best_variant = variant

        return best_variant or variants[0]

    @staticmethod
    def find_best_match(
        product: Product,
        selections: Dict[str, str]
    ) -> Dict[str, Any]:
        """
        Resolve selections to a variant plus the options left for navigation.
        """
        variant = VariantSelectionService.find_best_matching_variant(product, selections)
        available_options = VariantSelectionService.get_all_available_options(product, selections)

        if variant is None:
            return {
                'type': 'none',
                'message': 'No matching variant found',
                'available_options': available_options,
            }

        return {
            'type': 'variant',
            'id': variant.id,
            'sku': variant.sku,
            'slug': variant.slug,
            'name': variant.name,
            'product_slug': product.slug,
            'selling_price': str(variant.selling_price),
            'status': variant.status,
            'is_sellable': variant.is_sellable,
            'attributes': variant.attributes,
            'is_exact_match': VariantSelectionService._matches(variant, selections),
            'available_options': available_options,
        }
