"""
Image checks - alt text and lazy loading (WSG 2.11, 2.17).

Only images referenced through a src attribute are inspected; srcset
candidates are alternatives for the same element.
"""
from typing import List

from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.html_parser import ResourceReference
from wsg_check.services.page_fetcher import PageData

LAZY_LOADING = Guideline(
    id="2.11",
    name="Avoid Bloated or Unnecessary Content",
    success_criterion='Images below the fold should use loading="lazy" to defer unnecessary downloads',
    category=WSGCategory.UX,
    impact=Impact.MEDIUM,
    anchor="avoid-bloated-or-unnecessary-content",
)

ALT_TEXT = Guideline(
    id="2.17",
    name="Provide Suitable Alternatives to Web Assets",
    success_criterion="All <img> elements must have an alt attribute",
    category=WSGCategory.UX,
    impact=Impact.HIGH,
    anchor="provide-suitable-alternatives",
)


def _src_images(page: PageData) -> List[ResourceReference]:
    return [r for r in page.parsed_page.resources if r.type == "image" and "src" in r.attributes]


def _is_lazy(image: ResourceReference) -> bool:
    return image.attributes.get("loading", "").lower() == "lazy"


def check_alt_text(page: PageData) -> CheckResult:
    images = _src_images(page)
    if not images:
        return ALT_TEXT.result(CheckStatus.NOT_APPLICABLE, "No images found, alt text check not applicable.")

    missing = sum(1 for image in images if "alt" not in image.attributes)
    if missing == 0:
        return ALT_TEXT.result(CheckStatus.PASS, f"All {len(images)} image(s) have an alt attribute.")

    return ALT_TEXT.result(
        CheckStatus.FAIL,
        f"{missing} of {len(images)} image(s) are missing an alt attribute.",
        details=(
            f"{missing} image(s) have no alt attribute, so screen-reader users cannot tell what "
            "they show (WCAG 2.1 Success Criterion 1.1.1)."
        ),
        recommendation=(
            'Add an alt attribute to every <img>. Use descriptive text for content images and alt="" '
            "for decorative images so screen readers skip them."
        ),
    )


def check_lazy_loading(page: PageData) -> CheckResult:
    images = _src_images(page)
    if not images:
        return LAZY_LOADING.result(CheckStatus.NOT_APPLICABLE, "No images found, lazy-loading check not applicable.")

    # A single image is most likely the hero image, which should load eagerly
    if len(images) == 1:
        return LAZY_LOADING.result(
            CheckStatus.PASS,
            "Only one image found; eager loading is appropriate for a likely hero image.",
        )

    total = len(images)
    lazy = sum(1 for image in images if _is_lazy(image))

    if lazy == 0:
        return LAZY_LOADING.result(
            CheckStatus.FAIL,
            f'{total} image(s) found but none use loading="lazy".',
            details="Every image is downloaded on initial page load, including off-screen ones.",
            recommendation=(
                'Add loading="lazy" to all <img> elements except the first/hero image so off-screen '
                "images are only fetched when they approach the viewport."
            ),
        )

    if all(_is_lazy(image) for image in images[1:]):
        return LAZY_LOADING.result(
            CheckStatus.PASS,
            f'{lazy} of {total} image(s) use loading="lazy" (first image may be eager).',
        )

    eager = total - lazy
    return LAZY_LOADING.result(
        CheckStatus.WARN,
        f'{lazy} of {total} image(s) use loading="lazy"; {eager} may load eagerly while off-screen.',
        details=f'{lazy} image(s) have loading="lazy"; {eager} do not.',
        recommendation=(
            'Add loading="lazy" to every <img> outside the initial viewport. '
            "Keep the first/hero image eager."
        ),
    )
