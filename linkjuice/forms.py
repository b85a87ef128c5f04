"""Forms for the linkjuice app.

The generation form defines the three user-facing inputs and turns them
into a validated ``GenerateAnchorsRequest``. Validation is pure: it
never touches the network or the model.
"""

from __future__ import annotations

import re
from typing import List

from django import forms
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from .services import split_product_urls
from .types import GenerateAnchorsRequest

TARGET_URL_MESSAGE = 'Please enter a valid Target Category URL (e.g., https://example.com/category).'
NO_PRODUCT_URLS_MESSAGE = 'Please enter at least one valid product URL.'


class AbsoluteURLValidator(URLValidator):
    """Accept any absolute URL with a host, including intranet and staging hosts.

    Single-label hosts and underscores are allowed, so no public TLD is needed.
    """

    ul = URLValidator.ul
    hostname_re = r'[a-z' + ul + r'0-9_](?:[a-z' + ul + r'0-9_-]{0,61}[a-z' + ul + r'0-9_])?'
    host_re = '(' + hostname_re + r'(?:\.(?!-)[a-z' + ul + r'0-9_-]{1,63}(?<!-))*\.?)'

    regex = re.compile(
        r'^(?:[a-z0-9.+-]*)://'
        r'(?:[^\s:@/]+(?::[^\s:@/]*)?@)?'
        r'(?:' + URLValidator.ipv4_re + '|' + URLValidator.ipv6_re + '|' + host_re + ')'
        r'(?::[0-9]{1,5})?'
        r'(?:[/?#][^\s]*)?'
        r'\Z',
        re.IGNORECASE,
    )


_url_validator = AbsoluteURLValidator()


def is_valid_url(value: str) -> bool:
    """Return ``True`` when ``value`` is an absolute URL."""

    try:
        _url_validator(value)
    except ValidationError:
        return False
    return True


class GenerateAnchorsForm(forms.Form):
    """Form used to request anchor text suggestions for a category page."""

    target_url = forms.CharField(
        label='Target Category URL',
        widget=forms.URLInput(attrs={'placeholder': 'https://example.com/category'}),
        help_text='This is the page you want to rank higher.',
        error_messages={'required': TARGET_URL_MESSAGE},
    )
    target_keyword = forms.CharField(
        label='Target Keyword',
        widget=forms.TextInput(attrs={'placeholder': 'e.g. Photoshop Brushes'}),
        help_text='The main search term for the category.',
        error_messages={'required': 'Please enter the target keyword.'},
    )
    product_urls = forms.CharField(
        label='Source Product URLs',
        strip=False,
        widget=forms.Textarea(
            attrs={
                'rows': 10,
                'placeholder': 'https://example.com/product-1\nhttps://example.com/product-2',
            }
        ),
        help_text='One URL per line.',
        error_messages={'required': NO_PRODUCT_URLS_MESSAGE},
    )

    def clean_target_url(self) -> str:
        value = self.cleaned_data.get('target_url', '')
        if not is_valid_url(value):
            raise forms.ValidationError(TARGET_URL_MESSAGE)
        return value

    def clean_product_urls(self) -> List[str]:
        """Split the block into URLs and report invalid entries."""

        urls = split_product_urls(self.cleaned_data.get('product_urls', ''))
        if not urls:
            raise forms.ValidationError(NO_PRODUCT_URLS_MESSAGE)

        invalid = [url for url in urls if not is_valid_url(url)]
        if invalid:
            suffix = '...' if len(invalid) > 2 else ''
            raise forms.ValidationError(
                f"Invalid product URLs found: {', '.join(invalid[:2])}{suffix}"
            )
        return urls

    def to_request(self) -> GenerateAnchorsRequest:
        """Build the generation request from cleaned data."""

        if not self.is_valid():
            raise ValueError('Cannot build a request from an invalid form.')
        return GenerateAnchorsRequest(
            target_url=self.cleaned_data['target_url'],
            target_keyword=self.cleaned_data['target_keyword'],
            product_urls=list(self.cleaned_data['product_urls']),
        )
