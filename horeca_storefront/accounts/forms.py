# accounts/forms.py

from django import forms

ENTITY_INDIVIDUAL = "individual"
ENTITY_COMPANY = "company"

ENTITY_CHOICES = [
    (ENTITY_INDIVIDUAL, "Individual"),
    (ENTITY_COMPANY, "Company"),
]

MIN_PASSWORD_LENGTH = 6

CONTACT_FIELDS = ("first_name", "last_name", "phone", "email")
ADDRESS_FIELDS = ("county", "city", "address")
COMPANY_FIELDS = ("tax_id", "company_name")


class SignInForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput, strip=False)
    next = forms.CharField(required=False, widget=forms.HiddenInput)


class SignUpForm(forms.Form):
    first_name = forms.CharField(max_length=100)
    last_name = forms.CharField(max_length=100)
    email = forms.EmailField()
    phone = forms.CharField(max_length=32)
    password = forms.CharField(widget=forms.PasswordInput, strip=False)

    def clean_password(self):
        password = self.cleaned_data["password"]
        if len(password.strip()) < MIN_PASSWORD_LENGTH:
            raise forms.ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )
        return password


class SSOCallbackForm(forms.Form):
    """Credential handed over by the provider's sign-in button."""

    provider = forms.ChoiceField(choices=[("google", "Google"), ("apple", "Apple")])
    credential = forms.CharField()
    email = forms.EmailField()
    first_name = forms.CharField(required=False, max_length=100)
    last_name = forms.CharField(required=False, max_length=100)


class ForgotPasswordForm(forms.Form):
    email = forms.EmailField()


class ResetPasswordForm(forms.Form):
    token = forms.CharField(required=False, widget=forms.HiddenInput)
    password = forms.CharField(widget=forms.PasswordInput, strip=False, required=False)
    confirm_password = forms.CharField(widget=forms.PasswordInput, strip=False, required=False)

    def clean(self):
        cleaned = super().clean()
        token = (cleaned.get("token") or "").strip()
        password = cleaned.get("password") or ""
        confirm = cleaned.get("confirm_password") or ""

        if not token:
            raise forms.ValidationError(
                "Invalid reset link. Please request a new password reset."
            )
        if not password.strip():
            raise forms.ValidationError("Please enter a new password.")
        if password != confirm:
            raise forms.ValidationError("Passwords do not match.")
        if len(password.strip()) < MIN_PASSWORD_LENGTH:
            raise forms.ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )
        cleaned["token"] = token
        return cleaned


class CustomerDetailsForm(forms.Form):
    """
    Contact + address details (checkout, saved address).

    All fields are declared optional so missing groups can be reported
    together: contact, address, then company details.
    """

    entity_type = forms.ChoiceField(
        choices=ENTITY_CHOICES, initial=ENTITY_INDIVIDUAL, widget=forms.RadioSelect
    )

    first_name = forms.CharField(max_length=100, required=False)
    last_name = forms.CharField(max_length=100, required=False)
    phone = forms.CharField(max_length=32, required=False)
    email = forms.EmailField(required=False)

    tax_id = forms.CharField(max_length=64, required=False)
    company_name = forms.CharField(max_length=200, required=False)
    trade_register_no = forms.CharField(max_length=64, required=False)
    bank_name = forms.CharField(max_length=120, required=False)
    iban = forms.CharField(max_length=64, required=False)

    county = forms.CharField(max_length=100, required=False)
    city = forms.CharField(max_length=100, required=False)
    address = forms.CharField(max_length=300, required=False, widget=forms.Textarea(attrs={"rows": 3}))

    def clean(self):
        cleaned = super().clean()
        if self.errors:
            return cleaned

        if any(not cleaned.get(name) for name in CONTACT_FIELDS):
            raise forms.ValidationError(
                "Missing contact information: please fill in First Name, "
                "Last Name, Phone and Email.",
                code="contact",
            )
        if any(not cleaned.get(name) for name in ADDRESS_FIELDS):
            raise forms.ValidationError(
                "Missing address information: please fill in County, City and Address.",
                code="address",
            )
        if self.is_company(cleaned) and any(not cleaned.get(name) for name in COMPANY_FIELDS):
            raise forms.ValidationError(
                "Missing company information: please fill in Tax ID and Company Name.",
                code="company",
            )
        return cleaned

    @staticmethod
    def is_company(cleaned) -> bool:
        return cleaned.get("entity_type") == ENTITY_COMPANY

    @classmethod
    def initial_from_profile(cls, profile: dict | None) -> dict:
        """Map a backend profile onto form initial data (name split on the first space)."""
        profile = profile or {}
        full_name = (profile.get("full_name") or "").strip()
        first_name, _, last_name = full_name.partition(" ")
        entity_type = profile.get("entity_type")
        if entity_type not in (ENTITY_INDIVIDUAL, ENTITY_COMPANY):
            entity_type = ENTITY_INDIVIDUAL
        return {
            "entity_type": entity_type,
            "first_name": first_name,
            "last_name": last_name.strip(),
            "phone": profile.get("phone") or "",
            "email": profile.get("email") or "",
            "tax_id": profile.get("tax_id") or "",
            "company_name": profile.get("company_name") or "",
            "trade_register_no": profile.get("trade_register_no") or "",
            "bank_name": profile.get("bank_name") or "",
            "iban": profile.get("iban") or "",
            "county": profile.get("county") or "",
            "city": profile.get("city") or "",
            "address": profile.get("address") or "",
        }

    def address_payload(self) -> dict:
        data = self.cleaned_data
        payload = {
            "entity_type": data["entity_type"],
            "county": data["county"],
            "city": data["city"],
            "address": data["address"],
        }
        if self.is_company(data):
            for name in ("tax_id", "company_name", "trade_register_no", "bank_name", "iban"):
                payload[name] = data.get(name) or None
        return payload
