"""
Marketplace User Management Models

This module extends Django's built-in User model with a marketplace profile
carrying the account role, managed automatically through Django signals.

Models:
- Profile: Account role (learner / author / administrator)

Features:
- Automatic profile creation for new users

Author: Marketplace Development Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _


class Profile(models.Model):
    """
    Marketplace profile for an account.

    Attributes:
        user: One-to-one relationship with Django User model
        role: Account role within the marketplace

    The profile is automatically created when a new user is registered
    and maintains a one-to-one relationship with the User model.
    """

    class Role(models.TextChoices):
        LEARNER = "learner", _("Learner")
        AUTHOR = "author", _("Author")
        ADMINISTRATOR = "administrator", _("Administrator")

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.LEARNER,
        verbose_name=_("Role"),
        help_text=_("Role of the account within the marketplace"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "elearning_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username}, role={self.role})>"


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Automatically create a profile when a new user is created.

    Superusers start as administrators, everyone else as learners.
    """
    if created:
        role = Profile.Role.ADMINISTRATOR if instance.is_superuser else Profile.Role.LEARNER
        Profile.objects.get_or_create(user=instance, defaults={"role": role})
