from django import forms
from core.constants import RoomStatus
from .models import Room, Asset, RoomAsset


class RoomForm(forms.ModelForm):
    """Form for adding/editing rooms"""
    class Meta:
        model = Room
        fields = ['number', 'room_type', 'block', 'floor', 'capacity', 'price_per_night',
                  'pricing_period', 'description', 'amenities', 'images']
        widgets = {
            'number': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., 101'}),
            'room_type': forms.Select(attrs={'class': 'form-select'}),
            'block': forms.Select(attrs={'class': 'form-select'}),
            'floor': forms.NumberInput(attrs={'class': 'form-control'}),
            'capacity': forms.NumberInput(attrs={'class': 'form-control', 'min': 1}),
            'price_per_night': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01', 'min': 0}),
            'pricing_period': forms.Select(attrs={'class': 'form-select'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'amenities': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'WiFi, TV, Air conditioning'}),
            'images': forms.Textarea(attrs={'class': 'form-control', 'rows': 3,
                                            'placeholder': 'One image URL per line'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['capacity'].required = False
        self.fields['price_per_night'].required = False
        self.fields['room_type'].queryset = self.fields['room_type'].queryset.filter(is_active=True)

    def validate_unique(self):
        # Room number uniqueness per block is enforced by RoomService
        pass


class RoomStatusForm(forms.Form):
    status = forms.ChoiceField(choices=RoomStatus.CHOICES, widget=forms.Select(attrs={'class': 'form-select'}))


class AssetForm(forms.ModelForm):
    class Meta:
        model = Asset
        fields = ['name', 'category', 'description', 'serial_number', 'purchase_date',
                  'warranty_expiry', 'last_inspected', 'notes']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'category': forms.Select(attrs={'class': 'form-select'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'serial_number': forms.TextInput(attrs={'class': 'form-control'}),
            'purchase_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'warranty_expiry': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'last_inspected': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }


class AssignAssetForm(forms.ModelForm):
    """Place an asset in a room"""
    class Meta:
        model = RoomAsset
        fields = ['asset', 'quantity', 'condition', 'notes']
        widgets = {
            'asset': forms.Select(attrs={'class': 'form-select'}),
            'quantity': forms.NumberInput(attrs={'class': 'form-control', 'min': 1}),
            'condition': forms.Select(attrs={'class': 'form-select'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def validate_unique(self):
        # Re-assigning an asset adds to the existing quantity
        pass
