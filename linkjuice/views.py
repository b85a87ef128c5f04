"""Django views for the linkjuice app.

The single page renders the generation form and, after a successful
submission, the anchor suggestions returned by the model.
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse
from django.shortcuts import render
from django.views.decorators.http import require_http_methods

from .forms import GenerateAnchorsForm
from .services import GenerationError, generate_seo_anchors, unmatched_sources
from .types import LoadingState

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = (
    'Failed to generate recommendations. Please check your API key and try again.'
)


@require_http_methods(['GET', 'POST'])
def generate(request: HttpRequest) -> HttpResponse:
    """Handle displaying the generation form and rendering suggestions."""

    context = {
        'state': LoadingState.IDLE.value,
        'results': [],
        'error_message': None,
        'unmatched': [],
        'target_url': None,
    }

    if request.method == 'POST':
        form = GenerateAnchorsForm(request.POST)
        if form.is_valid():
            anchors_request = form.to_request()
            try:
                results = generate_seo_anchors(anchors_request)
            except GenerationError:
                context['state'] = LoadingState.ERROR.value
                context['error_message'] = GENERATION_FAILED_MESSAGE
            else:
                unmatched = unmatched_sources(anchors_request, results)
                if unmatched:
                    logger.warning('Model returned %d unknown source URLs', len(unmatched))
                context.update({
                    'state': LoadingState.SUCCESS.value,
                    'results': results,
                    'unmatched': unmatched,
                    'target_url': anchors_request.target_url,
                })
        else:
            context['state'] = LoadingState.ERROR.value
    else:
        form = GenerateAnchorsForm()

    context['form'] = form
    return render(request, 'linkjuice/generate.html', context)
