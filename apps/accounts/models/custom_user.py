"""Organizer account, identified by email and authenticated with one-time codes."""

from typing import ClassVar

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.accounts.managers.custom_user_manager import CustomUserManager
from apps.shared.base.models import BaseModel


class CustomUser(AbstractUser, BaseModel):
    """
    Passwordless organizer.

    Accounts are created on the first successful login code verification and
    never carry a usable password; staff accounts created through
    `createsuperuser` are the only exception.
    """

    username = None
    first_name = models.CharField(_('first name'), max_length=150, blank=True)
    last_name = models.CharField(_('last name'), max_length=150, blank=True)
    email = models.EmailField(_('email address'), unique=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS: ClassVar[list[str]] = []

    objects = CustomUserManager()

    class Meta:
        db_table = 'accounts_customuser'
        verbose_name = _('User')
        verbose_name_plural = _('Users')

    def save(self, *args, **kwargs):
        self.email = self.__class__.objects.normalize_email(self.email)
        if self.first_name:
            self.first_name = self.first_name.strip()
        if self.last_name:
            self.last_name = self.last_name.strip()
        super().save(*args, **kwargs)

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def display_name(self) -> str:
        """Get display name for UI purposes"""
        return self.full_name or self.email

    def __str__(self):
        return self.display_name

    def __repr__(self):
        return f"<CustomUser(id={self.id}, email='{self.email}')>"
