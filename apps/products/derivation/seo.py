"""
SEO metadata synthesis.

Manual values win for the Open Graph fields and for a canonical URL that
points outside the storefront product pages. The robots directive is always
derived from the publish and stock state.
"""

from apps.products import conf
from apps.products.choices import ProductStructure, ProductType, RobotsDirective

from .status import has_sellable_variant, to_quantity


ELLIPSIS = '...'

SEO_FIELDS = (
    'title', 'description', 'keywords', 'canonical', 'robots',
    'og_title', 'og_description', 'og_image',
)


def truncate(text, limit, marker=ELLIPSIS):
    """Cut ``text`` so that, marker included, it is at most ``limit`` long."""
    text = text or ''
    if len(text) <= limit:
        return text
    return text[:max(limit - len(marker), 0)] + marker


def _filled(value):
    return bool(value and str(value).strip())


def is_in_stock(document):
    if document.get('product_type') == ProductType.DIGITAL:
        return True
    if document.get('product_structure') == ProductStructure.VARIANT:
        return has_sellable_variant(document)

    base_stock = to_quantity(document.get('base_stock'))
    min_stock = to_quantity(document.get('min_stock'))
    if base_stock is None or min_stock is None:
        return False
    return base_stock > min_stock


def is_published(document):
    if (
        document.get('product_type') != ProductType.DIGITAL
        and document.get('product_structure') == ProductStructure.VARIANT
    ):
        return any(variant.get('published') for variant in document.get('variants') or [])
    return bool(document.get('published'))


def derive_robots(document):
    published = is_published(document)
    if published and is_in_stock(document):
        return RobotsDirective.INDEX_FOLLOW.value
    if published:
        return RobotsDirective.NOINDEX_FOLLOW.value
    return RobotsDirective.NOINDEX_NOFOLLOW.value


def canonical_url(slug, base_url=None):
    base_url = (base_url or conf.storefront_base_url()).rstrip('/')
    return f"{base_url}/products/{slug}"


def _canonical(document, current, base_url):
    base_url = (base_url or conf.storefront_base_url()).rstrip('/')
    if _filled(current) and not str(current).startswith(f"{base_url}/products/"):
        return current
    if not document.get('slug'):
        return current or None
    return canonical_url(document['slug'], base_url)


def _og_image(document):
    for variant in document.get('variants') or []:
        images = variant.get('images') or []
        if images:
            return images[0]
    image_urls = document.get('image_urls') or []
    if image_urls:
        return image_urls[0]
    return None


def synthesize_seo(document, base_url=None):
    """Return the derived ``seo`` sub-document of a product document."""
    seo = {field: None for field in SEO_FIELDS}
    seo['keywords'] = []
    seo.update(document.get('seo') or {})

    name = document.get('name') or ''
    title_limit = conf.get_setting('OG_TITLE_MAX_LENGTH')
    description_limit = conf.get_setting('OG_DESCRIPTION_MAX_LENGTH')

    seo['canonical'] = _canonical(document, seo.get('canonical'), base_url)
    seo['robots'] = derive_robots(document)

    if not _filled(seo.get('og_title')) and name:
        source = seo.get('title') if _filled(seo.get('title')) else name
        seo['og_title'] = truncate(source, title_limit)

    if not _filled(seo.get('og_description')) and name:
        if _filled(seo.get('description')):
            source = seo['description']
        elif _filled(document.get('description')):
            source = document['description']
        else:
            source = f"Discover {name} - quality product available now!"
        seo['og_description'] = truncate(source, description_limit)

    if not _filled(seo.get('og_image')):
        seo['og_image'] = _og_image(document)

    return seo
