from django.db import models

from .slugs import unique_slug


class Category(models.Model):
    """
    Hierarchical product categories.
    Examples: Clothing > T-Shirts > Graphic Tees
    A category with a parent is shown as a subcategory in the storefront.
    """
    name = models.CharField(
        max_length=200,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=200,
        unique=True,
        verbose_name='Slug'
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name='Parent category'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.full_path

    @property
    def full_path(self):
        """Category names from the root down, e.g. 'Clothing > T-Shirts'."""
        return ' > '.join(category.name for category in [*self.get_ancestors(), self])

    def get_ancestors(self):
        """Ancestors ordered from the root to the direct parent."""
        ancestors = []
        parent = self.parent
        while parent is not None:
            ancestors.append(parent)
            parent = parent.parent
        ancestors.reverse()
        return ancestors

    def get_descendants(self):
        """Returns all categories below this one, breadth first."""
        descendants = []
        level = list(self.children.all())
        while level:
            descendants.extend(level)
            level = list(Category.objects.filter(parent__in=level))
        return descendants

    @property
    def is_subcategory(self):
        return self.parent_id is not None

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Category, self.name, exclude_pk=self.pk, default='category')
        super().save(*args, **kwargs)
