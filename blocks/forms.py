from django import forms
from .models import Block


class BlockForm(forms.ModelForm):
    """Form for adding/editing blocks"""
    class Meta:
        model = Block
        fields = ['name', 'description', 'floors', 'location']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., Block A, East Wing'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'floors': forms.NumberInput(attrs={'class': 'form-control', 'min': 1}),
            'location': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Street or campus location'}),
        }

    def validate_unique(self):
        # Name uniqueness is enforced case-insensitively by BlockService
        pass
