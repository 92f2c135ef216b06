from django import forms
from core.constants import PaymentMethod, PaymentStatus
from bookings.models import Booking


class PaymentForm(forms.Form):
    """Record the payment of a booking"""
    booking = forms.ModelChoiceField(
        queryset=Booking.objects.none(),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=0.01,
                                widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    method = forms.ChoiceField(choices=PaymentMethod.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))
    transaction_id = forms.CharField(required=False, max_length=100,
                                     widget=forms.TextInput(attrs={'class': 'form-control'}))
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}))

    def __init__(self, *args, bookings=None, **kwargs):
        super().__init__(*args, **kwargs)
        if bookings is not None:
            self.fields['booking'].queryset = bookings


class PaymentStatusForm(forms.Form):
    status = forms.ChoiceField(choices=PaymentStatus.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))
    failure_reason = forms.CharField(required=False,
                                     widget=forms.TextInput(attrs={'class': 'form-control'}))


class DepositForm(forms.Form):
    booking = forms.ModelChoiceField(
        queryset=Booking.objects.none(),
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=0.01,
                                widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    method = forms.ChoiceField(choices=PaymentMethod.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))
    transaction_id = forms.CharField(required=False, max_length=100,
                                     widget=forms.TextInput(attrs={'class': 'form-control'}))

    def __init__(self, *args, bookings=None, **kwargs):
        super().__init__(*args, **kwargs)
        if bookings is not None:
            self.fields['booking'].queryset = bookings


class DepositRefundForm(forms.Form):
    """refund + deduction must add up to the deposit"""
    refund_amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=0, initial=0,
                                       widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    deduction_amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=0, initial=0,
                                          widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    deduction_reason = forms.CharField(required=False,
                                       widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}))
    damage_report = forms.CharField(required=False,
                                    widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}))
