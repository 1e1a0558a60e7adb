from django.contrib import admin

from eventease.models import Attendee, Event, Registration


class RegistrationInline(admin.TabularInline):
    model = Registration
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "date", "location", "category", "current_registrations", "capacity"]
    list_filter = ["category", "is_active"]
    search_fields = ["name", "location", "organizer"]
    inlines = [RegistrationInline]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["first_name", "last_name", "email", "event", "registered_at"]
    list_filter = ["event"]
    search_fields = ["email", "last_name"]


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "event", "status", "is_vip", "check_in_time"]
    list_filter = ["status", "is_vip", "event"]
    search_fields = ["name", "email", "company"]
