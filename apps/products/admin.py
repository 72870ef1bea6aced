from django.contrib import admin
from django.utils.html import format_html
from adminsortable2.admin import SortableAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import Category, Product, Variant
from .services import ProductCatalogService


# =============================================================================
# Inlines
# =============================================================================

class VariantInline(admin.TabularInline):
    model = Variant
    extra = 0
    fields = ['sku', 'name', 'selling_price', 'cost_price', 'stock', 'min_stock', 'status', 'published']
    readonly_fields = ['name', 'status']
    show_change_link = True


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Category)
class CategoryAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'parent', 'is_active', 'display_order']
    list_filter = ['is_active', 'parent']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = [
        'name', 'sku', 'product_type', 'product_structure', 'status_badge',
        'published', 'variant_count', 'updated_at'
    ]
    list_filter = ['product_type', 'product_structure', 'status', 'published', 'categories']
    search_fields = ['name', 'slug', 'sku', 'description']
    prepopulated_fields = {'slug': ('name',)}
    filter_horizontal = ['categories']
    readonly_fields = ['status', 'published', 'seo', 'variant_count', 'created_at', 'updated_at']
    inlines = [VariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'sku', 'description', 'product_type', 'product_structure', 'categories')
        }),
        ('Pricing & stock', {
            'fields': ('cost_price', 'selling_price', 'base_stock', 'min_stock')
        }),
        ('Derived', {
            'fields': ('status', 'published', 'seo')
        }),
        ('Media', {
            'fields': ('image_urls', 'tags')
        }),
        ('Physical', {
            'fields': ('weight', 'warranty', 'is_cod_available', 'is_free_shipping', 'is_new_arrival'),
            'classes': ('collapse',)
        }),
        ('Digital', {
            'fields': ('file_path', 'file_size', 'download_format', 'license_type', 'download_limit'),
            'classes': ('collapse',)
        }),
        ('Information', {
            'fields': ('variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['archive_products', 'restore_products']

    def status_badge(self, obj):
        colors = {
            'selling': 'green',
            'low_stock': 'orange',
            'out_of_stock': 'red',
            'draft': 'gray',
            'archived': 'black',
        }
        if obj.status is None:
            return '-'
        return format_html(
            '<span style="color: {};">{}</span>',
            colors.get(obj.status, 'gray'), obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        # Inline variants are saved after the product
        ProductCatalogService.refresh(form.instance)

    @admin.action(description='Archive selected products')
    def archive_products(self, request, queryset):
        count = ProductCatalogService.bulk_archive(queryset.values_list('pk', flat=True), archived=True)
        self.message_user(request, f'{count} products archived.')

    @admin.action(description='Restore selected products')
    def restore_products(self, request, queryset):
        count = ProductCatalogService.bulk_archive(queryset.values_list('pk', flat=True), archived=False)
        self.message_user(request, f'{count} products restored.')


@admin.register(Variant)
class VariantAdmin(SimpleHistoryAdmin):
    list_display = [
        'sku', 'name', 'product', 'selling_price', 'cost_price',
        'stock', 'status', 'published'
    ]
    list_filter = ['product', 'status', 'published']
    list_editable = ['selling_price', 'stock', 'published']
    search_fields = ['sku', 'name', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = ['status', 'profit_margin', 'created_at', 'updated_at']
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'sku', 'slug', 'name', 'attributes', 'images', 'position')
        }),
        ('Pricing', {
            'fields': ('cost_price', 'selling_price', 'profit_margin')
        }),
        ('Stock', {
            'fields': ('stock', 'min_stock', 'status', 'published')
        }),
        ('Information', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Catalog Admin'
admin.site.site_title = 'Catalog'
admin.site.index_title = 'Administration'
