"""
Accessibility checks - way-finding aids and form usability (WSG 2.19, 3.9, 3.12).
"""
from wsg_check.schemas.check_result import CheckResult, CheckStatus, Impact, WSGCategory
from wsg_check.services.checks.base import Guideline
from wsg_check.services.page_fetcher import PageData

ACCESSIBILITY_AIDS = Guideline(
    id="3.9",
    name="Provide Code-Based Way-Finding Mechanisms",
    success_criterion="Pages should offer a skip link and a <main> landmark so users can reach content directly",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="provide-code-based-way-finding",
)

FORM_VALIDATION = Guideline(
    id="3.12",
    name="Validate Forms",
    success_criterion="Form inputs should have associated labels and autocomplete hints",
    category=WSGCategory.WEB_DEV,
    impact=Impact.MEDIUM,
    anchor="validate-forms",
)

MINIMAL_FORMS = Guideline(
    id="2.19",
    name="Support Native User Interface Features",
    success_criterion="Forms should ask for few fields and use autocomplete and inputmode to reduce effort",
    category=WSGCategory.UX,
    impact=Impact.LOW,
    anchor="support-native-user-interface-features",
)

FORM_FIELDS_WARN = 7
FORM_FIELDS_FAIL = 12


def check_accessibility_aids(page: PageData) -> CheckResult:
    parsed = page.parsed_page
    has_nav = "nav" in parsed.landmarks or "navigation" in parsed.landmarks
    has_main = "main" in parsed.landmarks

    if not has_nav and not has_main and not parsed.has_skip_link:
        return ACCESSIBILITY_AIDS.result(
            CheckStatus.NOT_APPLICABLE,
            "No navigation, main landmark or skip link found; way-finding check not applicable.",
        )

    issues = []
    if not has_main:
        issues.append("No <main> landmark (or role=\"main\") found")
    if has_nav and not parsed.has_skip_link:
        issues.append("Navigation is present but no skip link lets keyboard users bypass it")

    if not issues:
        aria_count = len(parsed.aria_attributes)
        return ACCESSIBILITY_AIDS.result(
            CheckStatus.PASS,
            f"Way-finding aids present ({aria_count} distinct ARIA attribute(s) in use).",
        )

    status = CheckStatus.FAIL if has_nav and not parsed.has_skip_link else CheckStatus.WARN
    return ACCESSIBILITY_AIDS.result(
        status,
        f"{len(issues)} way-finding issue(s) detected.",
        details="; ".join(issues),
        recommendation=(
            'Add a "Skip to main content" link as the first focusable element and wrap the primary '
            "content in a <main> element so assistive technology can jump straight to it."
        ),
    )


def check_form_validation(page: PageData) -> CheckResult:
    inputs = page.parsed_page.form_inputs

    if not inputs:
        return FORM_VALIDATION.result(CheckStatus.NOT_APPLICABLE, "No form inputs found on the page.")

    unlabelled = [i for i in inputs if not i.has_label]
    if unlabelled:
        return FORM_VALIDATION.result(
            CheckStatus.FAIL,
            f"{len(unlabelled)} of {len(inputs)} input(s) lack an associated label.",
            details="Unlabelled input types: " + ", ".join(i.type for i in unlabelled),
            recommendation=(
                'Associate every input with a <label for="..."> or wrap it in a <label>. '
                "Labels reduce failed submissions and the repeat requests they cause."
            ),
        )

    if not any(i.has_autocomplete for i in inputs):
        return FORM_VALIDATION.result(
            CheckStatus.WARN,
            f"None of the {len(inputs)} input(s) declare an autocomplete attribute.",
            recommendation=(
                'Add autocomplete attributes (e.g. autocomplete="email") so browsers can fill '
                "known values and users make fewer errors."
            ),
        )

    return FORM_VALIDATION.result(
        CheckStatus.PASS,
        f"All {len(inputs)} input(s) are labelled and autocomplete hints are used.",
    )


def check_minimal_forms(page: PageData) -> CheckResult:
    inputs = page.parsed_page.form_inputs

    if not inputs:
        return MINIMAL_FORMS.result(CheckStatus.NOT_APPLICABLE, "No form inputs found on the page.")

    count = len(inputs)
    status = CheckStatus.PASS
    issues = []

    if count > FORM_FIELDS_FAIL:
        status = CheckStatus.FAIL
        issues.append(f"{count} form fields (budget: {FORM_FIELDS_FAIL})")
    elif count > FORM_FIELDS_WARN:
        status = CheckStatus.WARN
        issues.append(f"{count} form fields (consider reducing below {FORM_FIELDS_WARN + 1})")

    if not any(i.has_autocomplete for i in inputs):
        issues.append("No input uses autocomplete")
        if status == CheckStatus.PASS:
            status = CheckStatus.FAIL

    if not any(i.has_inputmode for i in inputs):
        issues.append("No input uses inputmode to select an appropriate virtual keyboard")
        if status == CheckStatus.PASS:
            status = CheckStatus.WARN

    if not issues:
        return MINIMAL_FORMS.result(
            CheckStatus.PASS,
            f"Form uses {count} field(s) with autocomplete and inputmode hints.",
        )

    return MINIMAL_FORMS.result(
        status,
        "Form optimisation issues detected.",
        details="; ".join(issues),
        recommendation=(
            "Ask only for the information you need, and use autocomplete and inputmode attributes "
            "so native browser features reduce typing and errors."
        ),
    )
