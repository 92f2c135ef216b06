from django import forms
from users.models import User


class GuestForm(forms.Form):
    """Add or edit a guest; the login and temporary password are generated"""
    first_name = forms.CharField(max_length=150, widget=forms.TextInput(attrs={'class': 'form-control'}))
    last_name = forms.CharField(max_length=150, widget=forms.TextInput(attrs={'class': 'form-control'}))
    email = forms.EmailField(required=False, widget=forms.EmailInput(attrs={'class': 'form-control'}))
    phone = forms.CharField(required=False, max_length=20, widget=forms.TextInput(attrs={'class': 'form-control'}))
    address = forms.CharField(required=False, widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}))
    gender = forms.ChoiceField(required=False, choices=[('', '---------')] + User.GENDER_CHOICES,
                               widget=forms.Select(attrs={'class': 'form-select'}))
    id_card = forms.CharField(required=False, max_length=50, label='ID card / passport',
                              widget=forms.TextInput(attrs={'class': 'form-control'}))


class GuestImportForm(forms.Form):
    csv_file = forms.FileField(label='CSV file',
                               widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.csv'}))

    def clean_csv_file(self):
        csv_file = self.cleaned_data['csv_file']
        if not csv_file.name.lower().endswith('.csv'):
            raise forms.ValidationError('Please upload a .csv file.')
        return csv_file
