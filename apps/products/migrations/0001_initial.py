# Generated manually

from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import simple_history.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('slug', models.SlugField(max_length=200, unique=True, verbose_name='Slug')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='children', to='products.category', verbose_name='Parent category')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Name')),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('sku', models.CharField(max_length=30, verbose_name='SKU')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('product_type', models.CharField(choices=[('physical', 'Physical'), ('digital', 'Digital')], default='physical', max_length=20, verbose_name='Product type')),
                ('product_structure', models.CharField(choices=[('simple', 'Simple'), ('variant', 'Variant')], default='simple', max_length=20, verbose_name='Product structure')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Cost price')),
                ('selling_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Selling price')),
                ('base_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Stock')),
                ('min_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Minimum stock')),
                ('status', models.CharField(blank=True, choices=[('selling', 'Selling'), ('out_of_stock', 'Out of stock'), ('draft', 'Draft'), ('archived', 'Archived'), ('low_stock', 'Low stock')], default='draft', max_length=20, null=True, verbose_name='Status')),
                ('published', models.BooleanField(blank=True, default=False, null=True, verbose_name='Published')),
                ('image_urls', models.JSONField(blank=True, default=list, verbose_name='Images')),
                ('tags', models.JSONField(blank=True, default=list, verbose_name='Tags')),
                ('seo', models.JSONField(blank=True, default=dict, help_text='title, description, keywords, canonical, robots, og_title, og_description, og_image', verbose_name='SEO')),
                ('weight', models.DecimalField(blank=True, decimal_places=3, max_digits=10, null=True, verbose_name='Weight (kg)')),
                ('warranty', models.CharField(blank=True, max_length=255, verbose_name='Warranty')),
                ('is_cod_available', models.BooleanField(default=True, verbose_name='Cash on delivery')),
                ('is_free_shipping', models.BooleanField(default=False, verbose_name='Free shipping')),
                ('is_new_arrival', models.BooleanField(default=False, verbose_name='New arrival')),
                ('file_path', models.CharField(blank=True, max_length=500, verbose_name='File path')),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True, verbose_name='File size (bytes)')),
                ('download_format', models.CharField(blank=True, max_length=50, verbose_name='Download format')),
                ('license_type', models.CharField(blank=True, max_length=100, verbose_name='License type')),
                ('download_limit', models.PositiveIntegerField(blank=True, null=True, verbose_name='Download limit')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('categories', models.ManyToManyField(blank=True, related_name='products', to='products.category', verbose_name='Categories')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Variant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sku', models.CharField(blank=True, help_text='Generated from the product SKU and attribute values if empty', max_length=100, verbose_name='SKU')),
                ('slug', models.SlugField(blank=True, max_length=255, verbose_name='Slug')),
                ('name', models.CharField(blank=True, help_text='Custom name (generated from product name and attributes if empty)', max_length=255, verbose_name='Name')),
                ('cost_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Cost price')),
                ('selling_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Selling price')),
                ('stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Stock')),
                ('min_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Minimum stock')),
                ('status', models.CharField(choices=[('selling', 'Selling'), ('out_of_stock', 'Out of stock'), ('draft', 'Draft'), ('archived', 'Archived'), ('low_stock', 'Low stock')], default='selling', max_length=20, verbose_name='Status')),
                ('published', models.BooleanField(default=True, verbose_name='Published')),
                ('attributes', models.JSONField(blank=True, default=dict, help_text='Attribute name to value, e.g. {"size": "M", "color": "Red"}', verbose_name='Attributes')),
                ('images', models.JSONField(blank=True, default=list, verbose_name='Images')),
                ('position', models.PositiveIntegerField(default=0, verbose_name='Position')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variants', to='products.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Variant',
                'verbose_name_plural': 'Variants',
                'ordering': ['product', 'position', 'sku'],
                'unique_together': {('product', 'sku')},
            },
        ),
        migrations.CreateModel(
            name='HistoricalProduct',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('name', models.CharField(max_length=255, verbose_name='Name')),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('sku', models.CharField(max_length=30, verbose_name='SKU')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('product_type', models.CharField(choices=[('physical', 'Physical'), ('digital', 'Digital')], default='physical', max_length=20, verbose_name='Product type')),
                ('product_structure', models.CharField(choices=[('simple', 'Simple'), ('variant', 'Variant')], default='simple', max_length=20, verbose_name='Product structure')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Cost price')),
                ('selling_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Selling price')),
                ('base_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Stock')),
                ('min_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Minimum stock')),
                ('status', models.CharField(blank=True, choices=[('selling', 'Selling'), ('out_of_stock', 'Out of stock'), ('draft', 'Draft'), ('archived', 'Archived'), ('low_stock', 'Low stock')], default='draft', max_length=20, null=True, verbose_name='Status')),
                ('published', models.BooleanField(blank=True, default=False, null=True, verbose_name='Published')),
                ('image_urls', models.JSONField(blank=True, default=list, verbose_name='Images')),
                ('tags', models.JSONField(blank=True, default=list, verbose_name='Tags')),
                ('seo', models.JSONField(blank=True, default=dict, help_text='title, description, keywords, canonical, robots, og_title, og_description, og_image', verbose_name='SEO')),
                ('weight', models.DecimalField(blank=True, decimal_places=3, max_digits=10, null=True, verbose_name='Weight (kg)')),
                ('warranty', models.CharField(blank=True, max_length=255, verbose_name='Warranty')),
                ('is_cod_available', models.BooleanField(default=True, verbose_name='Cash on delivery')),
                ('is_free_shipping', models.BooleanField(default=False, verbose_name='Free shipping')),
                ('is_new_arrival', models.BooleanField(default=False, verbose_name='New arrival')),
                ('file_path', models.CharField(blank=True, max_length=500, verbose_name='File path')),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True, verbose_name='File size (bytes)')),
                ('download_format', models.CharField(blank=True, max_length=50, verbose_name='Download format')),
                ('license_type', models.CharField(blank=True, max_length=100, verbose_name='License type')),
                ('download_limit', models.PositiveIntegerField(blank=True, null=True, verbose_name='Download limit')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Updated at')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'historical Product',
                'verbose_name_plural': 'historical Products',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='HistoricalVariant',
            fields=[
                ('id', models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name='ID')),
                ('sku', models.CharField(blank=True, help_text='Generated from the product SKU and attribute values if empty', max_length=100, verbose_name='SKU')),
                ('slug', models.SlugField(blank=True, max_length=255, verbose_name='Slug')),
                ('name', models.CharField(blank=True, help_text='Custom name (generated from product name and attributes if empty)', max_length=255, verbose_name='Name')),
                ('cost_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Cost price')),
                ('selling_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Selling price')),
                ('stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Stock')),
                ('min_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Minimum stock')),
                ('status', models.CharField(choices=[('selling', 'Selling'), ('out_of_stock', 'Out of stock'), ('draft', 'Draft'), ('archived', 'Archived'), ('low_stock', 'Low stock')], default='selling', max_length=20, verbose_name='Status')),
                ('published', models.BooleanField(default=True, verbose_name='Published')),
                ('attributes', models.JSONField(blank=True, default=dict, help_text='Attribute name to value, e.g. {"size": "M", "color": "Red"}', verbose_name='Attributes')),
                ('images', models.JSONField(blank=True, default=list, verbose_name='Images')),
                ('position', models.PositiveIntegerField(default=0, verbose_name='Position')),
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Updated at')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=[('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')], max_length=1)),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('product', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='products.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'historical Variant',
                'verbose_name_plural': 'historical Variants',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
