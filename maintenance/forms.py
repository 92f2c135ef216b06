from django import forms
from core.constants import MaintenanceType, MaintenanceStatus, Priority
from rooms.models import Room, Asset


class MaintenanceForm(forms.Form):
    room = forms.ModelChoiceField(queryset=Room.objects.select_related('block').order_by('number'),
                                  widget=forms.Select(attrs={'class': 'form-select'}))
    asset = forms.ModelChoiceField(queryset=Asset.objects.all(), required=False,
                                   widget=forms.Select(attrs={'class': 'form-select'}))
    type = forms.ChoiceField(choices=MaintenanceType.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))
    priority = forms.ChoiceField(choices=Priority.CHOICES, initial=Priority.MEDIUM,
                                 widget=forms.Select(attrs={'class': 'form-select'}))
    description = forms.CharField(widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}))
    reported_by = forms.CharField(required=False, max_length=100,
                                  widget=forms.TextInput(attrs={'class': 'form-control'}))
    assigned_to = forms.CharField(required=False, max_length=100,
                                  widget=forms.TextInput(attrs={'class': 'form-control'}))
    cost = forms.DecimalField(required=False, max_digits=10, decimal_places=2, min_value=0,
                              widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}))


class MaintenanceStatusForm(forms.Form):
    status = forms.ChoiceField(choices=MaintenanceStatus.CHOICES,
                               widget=forms.Select(attrs={'class': 'form-select'}))
    cost = forms.DecimalField(required=False, max_digits=10, decimal_places=2, min_value=0,
                              widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}))
    notes = forms.CharField(required=False, widget=forms.TextInput(attrs={'class': 'form-control'}))
