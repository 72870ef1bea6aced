"""
Script to create sample categories and products.
Run with: python manage.py shell < create_sample_data.py
"""
from decimal import Decimal

from apps.products.derivation import VariantCombinationBuilder
from apps.products.models import Category, Product, Variant
from apps.products.services import ProductCatalogService

# Create Categories
print("Creating categories...")

clothing, _ = Category.objects.get_or_create(slug='clothing', defaults={'name': 'Clothing'})
tshirts, _ = Category.objects.get_or_create(
    slug='t-shirts', defaults={'name': 'T-Shirts', 'parent': clothing}
)
downloads, _ = Category.objects.get_or_create(slug='downloads', defaults={'name': 'Downloads'})

# Build variant combinations
print("Generating combinations...")

builder = VariantCombinationBuilder(['size', 'color'], product_name='Basic T-Shirt', base_sku='TSHIRT')
builder.mark_ready()
builder.select('attr-size', ['S', 'M', 'L'])
builder.select('attr-color', ['Black', 'White'])
for index, combination in enumerate(builder.combinations):
    builder.update_combination(
        index,
        cost_price=Decimal('35.00'),
        selling_price=Decimal('79.90'),
        stock=10 if combination['attributes']['size'] != 'L' else 0,
        min_stock=2,
    )

# Create Products
print("Creating products...")

if not Product.objects.filter(slug='basic-t-shirt').exists():
    ProductCatalogService.save_document({
        'name': 'Basic T-Shirt',
        'sku': 'TSHIRT',
        'description': 'Comfortable cotton t-shirt',
        'product_structure': 'variant',
        'variants': builder.combinations,
        'categories': [tshirts],
    })

if not Product.objects.filter(slug='canvas-tote-bag').exists():
    ProductCatalogService.save_document({
        'name': 'Canvas Tote Bag',
        'sku': 'TOTE',
        'description': 'Heavy canvas tote bag',
        'cost_price': Decimal('12.00'),
        'selling_price': Decimal('29.90'),
        'base_stock': 25,
        'min_stock': 5,
        'published': True,
        'image_urls': ['https://cdn.example.com/tote.jpg'],
        'categories': [clothing],
    })

if not Product.objects.filter(slug='pattern-pack').exists():
    ProductCatalogService.save_document({
        'name': 'Pattern Pack',
        'sku': 'PATTERNS',
        'product_type': 'digital',
        'published': True,
        'download_format': 'PDF',
        'categories': [downloads],
    })

print("\n✅ Sample data created successfully!")
print(f"   - {Category.objects.count()} categories")
print(f"   - {Product.objects.count()} products")
print(f"   - {Variant.objects.count()} variants")
for product in Product.objects.all():
    print(f"   * {product.name}: status={product.status} published={product.published} robots={product.seo.get('robots')}")
