# pages/forms.py

from django import forms

DEFAULT_SUBJECT = "Contact Form Submission"


class ContactForm(forms.Form):
    name = forms.CharField(max_length=200)
    email = forms.EmailField()
    subject = forms.CharField(max_length=200, required=False)
    message = forms.CharField(widget=forms.Textarea(attrs={"rows": 6}), max_length=5000)

    def message_payload(self) -> dict:
        data = self.cleaned_data
        return {
            "name": data["name"],
            "email": data["email"],
            "subject": data["subject"] or DEFAULT_SUBJECT,
            "message": data["message"],
        }
