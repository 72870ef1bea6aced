from django.utils.text import slugify

from apps.products.derivation.identifiers import slugify_value


def unique_slug(model, name, exclude_pk=None, default='item'):
    """
    Slug for ``name`` restricted to ``[a-z0-9-]`` and unique among ``model`` rows.

    Example: 'Cool_Bag' -> 'cool-bag', then 'cool-bag-1' if taken.
    """
    slug = slugify_value(slugify(name or '')) or default
    # Ensure unique slug
    base_slug = slug
    counter = 1
    while model.objects.filter(slug=slug).exclude(pk=exclude_pk).exists():
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug
