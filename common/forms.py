from django import forms
from core.constants import SettingCategory
from .models import Setting


class SettingForm(forms.ModelForm):
    """Add or change a runtime setting; secret values are never echoed back"""
    class Meta:
        model = Setting
        fields = ['key', 'value', 'category', 'is_secret', 'description']
        widgets = {
            'key': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g., SITE_NAME'}),
            'value': forms.TextInput(attrs={'class': 'form-control'}),
            'category': forms.Select(attrs={'class': 'form-select'}, choices=SettingCategory.CHOICES),
            'is_secret': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
            'description': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and self.instance.is_secret:
            self.initial['value'] = ''
            self.fields['value'].widget = forms.PasswordInput(
                attrs={'class': 'form-control', 'placeholder': 'Leave empty to keep the current value'}
            )
            self.fields['value'].required = False

    def clean_key(self):
        return self.cleaned_data['key'].strip().upper()

    def clean_value(self):
        value = self.cleaned_data.get('value', '')
        if not value and self.instance.pk and self.instance.is_secret:
            return self.instance.value
        return value
