"""
Variant combination generation.

Attributes are transient dimensions such as size or color. Selecting values
for them yields the cartesian product of combinations, each of which can
later be promoted to a persisted Variant.
"""

import enum
import itertools
import logging
from typing import Dict, Iterable, List, Optional

from .identifiers import fill_identifiers


logger = logging.getLogger(__name__)


DEFAULT_ATTRIBUTE_OPTIONS = {
    'size': ['XS', 'S', 'M', 'L', 'XL', 'XXL'],
    'color': ['Red', 'Blue', 'Green', 'Black', 'White', 'Yellow', 'Purple', 'Orange'],
    'material': ['Cotton', 'Polyester', 'Wool', 'Silk', 'Linen', 'Denim', 'Leather'],
}

COMBINATION_IDENTIFIER_FIELDS = ('sku', 'slug', 'name')


class CombinationError(ValueError):
    """Invalid attribute or selection input for the combination builder."""


class BuilderPhase(enum.Enum):
    LOADING = 'loading'
    READY = 'ready'


def make_attribute(name: str, options: Optional[Iterable[str]] = None, allow_custom=True, attribute_id=None) -> dict:
    name = (name or '').strip()
    if not name:
        raise CombinationError('Attribute name is required')
    if options is None:
        options = DEFAULT_ATTRIBUTE_OPTIONS.get(name.lower(), [])
    return {
        'id': attribute_id or f"attr-{name.lower()}",
        'name': name,
        'options': [str(option) for option in options],
        'allow_custom': allow_custom,
    }


def new_combination(attributes: Dict[str, str]) -> dict:
    return {
        'sku': '',
        'slug': '',
        'name': '',
        'cost_price': None,
        'selling_price': None,
        'stock': None,
        'min_stock': None,
        'images': [],
        'attributes': dict(attributes),
        'published': True,
    }


def attribute_key(attributes: Optional[Dict[str, str]]):
    """Order-insensitive identity of an attribute map."""
    return frozenset((str(k), str(v)) for k, v in (attributes or {}).items())


def generate_combinations(attributes: List[dict], selected_values: Dict[str, List[str]]) -> List[dict]:
    """
    Cartesian product of the selected values.

    Attributes without any selected value are left out of the product.
    Attribute maps follow the declared order of ``attributes``.

    Example:
        attributes = [size, color], selected = {size.id: ['S', 'M'], color.id: ['Red']}
        -> [{'size': 'S', 'color': 'Red'}, {'size': 'M', 'color': 'Red'}]
    """
    active = [
        (attribute['name'], selected_values[attribute['id']])
        for attribute in attributes
        if selected_values.get(attribute['id'])
    ]
    if not active:
        return []

    names = [name for name, _ in active]
    return [
        new_combination(dict(zip(names, values)))
        for values in itertools.product(*(values for _, values in active))
    ]


def merge_combinations(existing: List[dict], generated: List[dict]) -> List[dict]:
    """
    Keep existing combinations whose attribute map matches a generated one.

    Matching combinations retain everything previously entered; the rest of
    ``existing`` is dropped. Output order follows ``generated``.
    """
    by_key = {}
    for combination in existing:
        by_key.setdefault(attribute_key(combination.get('attributes')), combination)

    merged = []
    for combination in generated:
        match = by_key.get(attribute_key(combination['attributes']))
        if match is None:
            merged.append(combination)
            continue
        preserved = dict(match)
        preserved['attributes'] = dict(combination['attributes'])
        merged.append(preserved)
    return merged


class VariantCombinationBuilder:
    """
    Holds the attribute selection and the combinations of a product form.

    The builder starts in ``LOADING``: while persisted combinations are
    being loaded, an empty selection never clears them. Once ``load()``
    (or ``mark_ready()``) has run the builder is ``READY`` and an empty
    selection empties the combination list.
    """

    def __init__(self, attributes=None, product_name='', base_sku='', auto_generate_identifiers=True):
        self.attributes = []
        self.selected_values = {}
        self.combinations = []
        self.product_name = product_name or ''
        self.base_sku = base_sku or ''
        self.auto_generate_identifiers = auto_generate_identifiers
        self.phase = BuilderPhase.LOADING

        for attribute in attributes or []:
            if isinstance(attribute, str):
                attribute = make_attribute(attribute)
            self._add(attribute)

    # -------------------------------------------------------------------------
    # Attributes
    # -------------------------------------------------------------------------

    def get_attribute(self, attribute_id) -> dict:
        for attribute in self.attributes:
            if attribute['id'] == attribute_id:
                return attribute
        raise CombinationError(f"Unknown attribute '{attribute_id}'")

    def find_attribute_by_name(self, name) -> Optional[dict]:
        name = (name or '').strip().lower()
        for attribute in self.attributes:
            if attribute['name'].lower() == name:
                return attribute
        return None

    def _add(self, attribute):
        if self.find_attribute_by_name(attribute['name']):
            raise CombinationError(f"Attribute '{attribute['name']}' already exists")
        attribute = dict(attribute, options=list(attribute.get('options') or []))
        attribute.setdefault('allow_custom', True)
        self.attributes.append(attribute)
        self.selected_values.setdefault(attribute['id'], [])
        return attribute

    def add_attribute(self, name, options=None, allow_custom=True, attribute_id=None) -> dict:
        return self._add(make_attribute(name, options, allow_custom, attribute_id))

    def remove_attribute(self, attribute_id):
        attribute = self.get_attribute(attribute_id)
        self.attributes.remove(attribute)
        self.selected_values.pop(attribute_id, None)
        return self.regenerate()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, combinations: List[dict]):
        """
        Load persisted combinations and rebuild the selection from them.

        No regeneration happens here, so nothing persisted is lost.
        """
        if self.phase is BuilderPhase.READY:
            raise CombinationError('Combinations were already loaded')

        self.combinations = [dict(combination) for combination in combinations or []]
        for combination in self.combinations:
            for name, value in (combination.get('attributes') or {}).items():
                attribute = self.find_attribute_by_name(name) or self.add_attribute(name)
                value = str(value)
                if value not in attribute['options']:
                    attribute['options'].append(value)
                selected = self.selected_values.setdefault(attribute['id'], [])
                if value not in selected:
                    selected.append(value)

        logger.debug('Loaded %d persisted combinations', len(self.combinations))
        self.mark_ready()
        return self.combinations

    def mark_ready(self):
        self.phase = BuilderPhase.READY

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, attribute_id, values: Iterable[str]):
        attribute = self.get_attribute(attribute_id)
        cleaned = []
        for value in values or []:
            value = str(value).strip()
            if not value or value in cleaned:
                continue
            if value not in attribute['options']:
                if not attribute['allow_custom']:
                    raise CombinationError(
                        f"'{value}' is not an option of attribute '{attribute['name']}'"
                    )
                attribute['options'].append(value)
            cleaned.append(value)

        self.selected_values[attribute_id] = cleaned
        return self.regenerate()

    def regenerate(self) -> List[dict]:
        valid_selection = {
            attribute_id: values
            for attribute_id, values in self.selected_values.items()
            if values
        }

        if not valid_selection:
            if self.phase is BuilderPhase.READY:
                self.combinations = []
            else:
                logger.debug('Empty selection while loading, keeping %d combinations', len(self.combinations))
            return self.combinations

        generated = generate_combinations(self.attributes, valid_selection)
        merged = merge_combinations(self.combinations, generated)
        if self.auto_generate_identifiers:
            merged = [
                fill_identifiers(combination, self.base_sku, self.product_name)
                for combination in merged
            ]
        self.combinations = merged
        return self.combinations

    # -------------------------------------------------------------------------
    # Combination editing
    # -------------------------------------------------------------------------

    def set_product(self, product_name=None, base_sku=None):
        """Update the base identifiers; only empty identifiers are filled."""
        if product_name is not None:
            self.product_name = product_name
        if base_sku is not None:
            self.base_sku = base_sku
        if self.auto_generate_identifiers:
            self.combinations = [
                fill_identifiers(combination, self.base_sku, self.product_name)
                for combination in self.combinations
            ]
        return self.combinations

    def regenerate_identifiers(self, fields=COMBINATION_IDENTIFIER_FIELDS, index=None):
        """Explicitly regenerate identifiers, overwriting manual values."""
        targets = range(len(self.combinations)) if index is None else [index]
        for position in targets:
            self.combinations[position] = fill_identifiers(
                self.combinations[position], self.base_sku, self.product_name,
                regenerate=fields,
            )
        return self.combinations

    def update_combination(self, index, **changes):
        if 'attributes' in changes:
            raise CombinationError('Combination attributes are derived from the selection')
        try:
            combination = self.combinations[index]
        except IndexError:
            raise CombinationError(f'No combination at position {index}')
        combination.update(changes)
        return combination

    def remove_combination(self, index):
        try:
            return self.combinations.pop(index)
        except IndexError:
            raise CombinationError(f'No combination at position {index}')

    def to_data(self) -> dict:
        return {
            'attributes': [
                {
                    'id': attribute['id'],
                    'name': attribute['name'],
                    'values': list(self.selected_values.get(attribute['id'], [])),
                }
                for attribute in self.attributes
            ],
            'combinations': [dict(combination) for combination in self.combinations],
        }
