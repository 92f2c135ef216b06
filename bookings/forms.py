from django import forms
from django.contrib.auth import get_user_model
from core.constants import BookingStatus, PaymentMethod, UserRole, RoomStatus
from rooms.models import Room
from addons.models import Service

User = get_user_model()


class BookingForm(forms.Form):
    """New booking; the guest field is dropped when a guest books for themselves"""
    guest = forms.ModelChoiceField(
        queryset=User.objects.filter(role=UserRole.GUEST).order_by('first_name', 'last_name'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    room = forms.ModelChoiceField(
        queryset=Room.objects.exclude(status__in=RoomStatus.LOCKED).select_related('room_type', 'block'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    check_in_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    periods = forms.IntegerField(min_value=1, initial=1,
                                 widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
    guests = forms.IntegerField(min_value=1, initial=1,
                                widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
    special_requests = forms.CharField(required=False,
                                       widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}))

    def __init__(self, *args, include_guest=True, **kwargs):
        super().__init__(*args, **kwargs)
        if not include_guest:
            del self.fields['guest']


class BookingEditForm(forms.Form):
    room = forms.ModelChoiceField(
        queryset=Room.objects.select_related('room_type', 'block'),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    check_in_date = forms.DateField(widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}))
    periods = forms.IntegerField(min_value=1, widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
    guests = forms.IntegerField(min_value=1, widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
    special_requests = forms.CharField(required=False,
                                       widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 4}))


class BookingStatusForm(forms.Form):
    status = forms.ChoiceField(choices=BookingStatus.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))


class ExtensionForm(forms.Form):
    periods = forms.IntegerField(min_value=1, initial=1,
                                 widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
    reason = forms.CharField(required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
    method = forms.ChoiceField(choices=PaymentMethod.CHOICES, initial=PaymentMethod.CASH,
                               widget=forms.Select(attrs={'class': 'form-select'}))


class AddServiceForm(forms.Form):
    service = forms.ModelChoiceField(queryset=Service.objects.filter(is_active=True),
                                     widget=forms.Select(attrs={'class': 'form-select'}))
    quantity = forms.IntegerField(min_value=1, initial=1,
                                  widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1}))
