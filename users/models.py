from django.contrib.auth.models import AbstractUser
from django.db import models
from core.constants import UserRole


class User(AbstractUser):
    """Custom User model - Admin/Manager/Staff operate the property, Guests stay in it"""
    GENDER_CHOICES = [
        ('MALE', 'Male'),
        ('FEMALE', 'Female'),
        ('OTHER', 'Other'),
    ]

    email = models.EmailField(unique=True, null=True, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.CHOICES, default=UserRole.GUEST)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)
    id_card = models.CharField(max_length=50, blank=True, help_text="National ID or passport number")

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=['role'], name='user_role_idx'),
            models.Index(fields=['role', 'date_joined'], name='user_role_joined_idx'),
            models.Index(fields=['id_card'], name='user_id_card_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.get_role_display()})"

    @property
    def full_name(self):
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.username

    @property
    def is_guest(self):
        return self.role == UserRole.GUEST

    @property
    def is_staff_member(self):
        """Front-desk roles: Admin, Manager, Staff"""
        return self.role in UserRole.STAFF_ROLES

    @property
    def is_management(self):
        return self.role in UserRole.MANAGEMENT_ROLES

    @property
    def is_admin_role(self):
        return self.role == UserRole.ADMIN

    def save(self, *args, **kwargs):
        # Blank emails are stored as NULL so the unique constraint ignores them
        if not self.email:
            self.email = None
        super().save(*args, **kwargs)
