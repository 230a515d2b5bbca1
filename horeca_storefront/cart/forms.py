# cart/forms.py

from django import forms


class AddToCartForm(forms.Form):
    slug = forms.SlugField()
    variant_id = forms.CharField(required=False)
    size = forms.CharField(required=False, max_length=64)
    qty = forms.IntegerField(min_value=1, required=False)
    next = forms.CharField(required=False)

    def clean_qty(self):
        return self.cleaned_data.get("qty") or 1


class CartLineForm(forms.Form):
    token = forms.CharField(max_length=32)


class UpdateQtyForm(CartLineForm):
    qty = forms.IntegerField()


class ToggleFavoriteForm(forms.Form):
    slug = forms.SlugField()
    next = forms.CharField(required=False)
