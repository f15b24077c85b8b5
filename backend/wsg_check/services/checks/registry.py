"""
Check registry - every implemented guideline check, in run order.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from wsg_check.schemas.check_result import WSGCategory
from wsg_check.services.check_runner import CheckFn
from wsg_check.services.checks.accessibility import (
    check_accessibility_aids,
    check_form_validation,
    check_minimal_forms,
)
from wsg_check.services.checks.files import check_beneficial_files, check_expected_files
from wsg_check.services.checks.hosting import (
    check_caching,
    check_cdn_usage,
    check_compression,
    check_redirects,
    check_sustainable_hosting,
)
from wsg_check.services.checks.markup import (
    check_html_version,
    check_metadata,
    check_semantic_html,
    check_structured_data,
)
from wsg_check.services.checks.media import check_alt_text, check_lazy_loading
from wsg_check.services.checks.performance import (
    check_dependency_count,
    check_page_weight,
    check_render_blocking,
    check_third_party,
)
from wsg_check.services.checks.security import check_security_headers
from wsg_check.services.checks.styles import (
    check_font_stack_fallbacks,
    check_minification,
    check_preference_media_queries,
    check_responsive_design,
)


@dataclass(frozen=True)
class RegisteredCheck:
    guideline_id: str
    category: WSGCategory
    check: CheckFn


CHECK_REGISTRY: List[RegisteredCheck] = [
    # UX
    RegisteredCheck("2.11", WSGCategory.UX, check_lazy_loading),
    RegisteredCheck("2.16", WSGCategory.UX, check_font_stack_fallbacks),
    RegisteredCheck("2.17", WSGCategory.UX, check_alt_text),
    RegisteredCheck("2.19", WSGCategory.UX, check_minimal_forms),
    # Web development
    RegisteredCheck("3.1", WSGCategory.WEB_DEV, check_page_weight),
    RegisteredCheck("3.3", WSGCategory.WEB_DEV, check_minification),
    RegisteredCheck("3.4", WSGCategory.WEB_DEV, check_metadata),
    RegisteredCheck("3.6", WSGCategory.WEB_DEV, check_third_party),
    RegisteredCheck("3.7", WSGCategory.WEB_DEV, check_semantic_html),
    RegisteredCheck("3.8", WSGCategory.WEB_DEV, check_render_blocking),
    RegisteredCheck("3.9", WSGCategory.WEB_DEV, check_accessibility_aids),
    RegisteredCheck("3.12", WSGCategory.WEB_DEV, check_form_validation),
    RegisteredCheck("3.12", WSGCategory.WEB_DEV, check_preference_media_queries),
    RegisteredCheck("3.13", WSGCategory.WEB_DEV, check_structured_data),
    RegisteredCheck("3.13", WSGCategory.WEB_DEV, check_responsive_design),
    RegisteredCheck("3.15", WSGCategory.WEB_DEV, check_security_headers),
    RegisteredCheck("3.16", WSGCategory.WEB_DEV, check_dependency_count),
    RegisteredCheck("3.17", WSGCategory.WEB_DEV, check_expected_files),
    RegisteredCheck("3.17", WSGCategory.WEB_DEV, check_beneficial_files),
    RegisteredCheck("3.19", WSGCategory.WEB_DEV, check_html_version),
    # Hosting
    RegisteredCheck("4.1", WSGCategory.HOSTING, check_sustainable_hosting),
    RegisteredCheck("4.2", WSGCategory.HOSTING, check_caching),
    RegisteredCheck("4.3", WSGCategory.HOSTING, check_compression),
    RegisteredCheck("4.4", WSGCategory.HOSTING, check_redirects),
    RegisteredCheck("4.10", WSGCategory.HOSTING, check_cdn_usage),
]


def select_checks(
    categories: Optional[Iterable[str]] = None,
    guidelines: Optional[Iterable[str]] = None,
    exclude_guidelines: Optional[Iterable[str]] = None,
) -> List[CheckFn]:
    """
    Filter the registry, keeping registry order.

    Args:
        categories: Categories to include (None or empty = all)
        guidelines: Guideline ids to include (None or empty = all)
        exclude_guidelines: Guideline ids to drop
    """
    wanted_categories = {WSGCategory(c) for c in categories or []}
    wanted_guidelines = set(guidelines or [])
    excluded = set(exclude_guidelines or [])

    selected = []
    for entry in CHECK_REGISTRY:
        if wanted_categories and entry.category not in wanted_categories:
            continue
        if wanted_guidelines and entry.guideline_id not in wanted_guidelines:
            continue
        if entry.guideline_id in excluded:
            continue
        selected.append(entry.check)
    return selected
