"""Built-in local SEO SOP templates.

Four templates ship with the service: new location setup, GBP suspension
recovery, rebrand and monthly maintenance. They are published through the
same validator as user templates when the store is seeded at startup.
"""

from __future__ import annotations

from sopflow.application.interfaces.repositories import ITemplateRepository
from sopflow.application.services.template_validator import TemplateValidator
from sopflow.domain.entities import SOPTemplateEntity, TaskTemplateEntity
from sopflow.domain.enums import BusinessVariant, EvidenceKind, TaskCategory, WorkflowType
from sopflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

RR = BusinessVariant.RANK_RENT
TR = BusinessVariant.TRADITIONAL
GBP = BusinessVariant.GBP_ONLY
ALL_VARIANTS = frozenset({RR, TR, GBP})


def _task(
    key: str,
    title: str,
    instructions: str,
    category: TaskCategory,
    evidence: EvidenceKind,
    minutes: int,
    *,
    required: bool = True,
    approval: bool = False,
    variants: frozenset[BusinessVariant] = ALL_VARIANTS,
    depends_on: tuple[str, ...] = (),
) -> TaskTemplateEntity:
    return TaskTemplateEntity(
        key=key,
        title=title,
        instructions=instructions,
        category=category,
        evidence_kind=evidence,
        estimated_minutes=minutes,
        is_required=required,
        requires_owner_approval=approval,
        applicable_variants=variants,
        depends_on=depends_on,
    )


NEW_LOCATION = SOPTemplateEntity(
    id="sop-new-location",
    name="New Location Setup",
    description="Complete checklist for setting up a new business location in the local SEO ecosystem",
    workflow_type=WorkflowType.NEW_LOCATION,
    applicable_variants=ALL_VARIANTS,
    tasks=(
        _task(
            "claim-gbp",
            "Create or Claim Google Business Profile",
            "Search business.google.com for the business. Claim the existing listing or add "
            "a new one, select the primary category and complete verification. Save the GBP URL.",
            TaskCategory.GBP_SETUP,
            EvidenceKind.URL,
            20,
        ),
        _task(
            "primary-category",
            "Set Primary Business Category",
            "In the profile editor choose the most specific primary category; check what "
            "top-ranking competitors use. Screenshot the selected category.",
            TaskCategory.GBP_SETUP,
            EvidenceKind.SCREENSHOT,
            10,
            depends_on=("claim-gbp",),
        ),
        _task(
            "secondary-categories",
            "Add Secondary Categories",
            "Add 2-5 secondary categories that reflect services actually offered. "
            "Screenshot all selected categories.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            10,
            depends_on=("primary-category",),
        ),
        _task(
            "service-area",
            "Configure Service Area",
            "Choose storefront, service area or hybrid. For service areas add specific "
            "cities or zip codes within a realistic radius. Screenshot the configuration.",
            TaskCategory.GBP_SETUP,
            EvidenceKind.SCREENSHOT,
            10,
            depends_on=("claim-gbp",),
        ),
        _task(
            "validate-nap",
            "Validate NAP Information",
            "Confirm name, address (USPS format) and phone are exactly consistent with the "
            "website. Paste the canonical NAP block as evidence.",
            TaskCategory.DOCUMENTATION,
            EvidenceKind.TEXT,
            10,
            depends_on=("claim-gbp",),
        ),
        _task(
            "initial-photos",
            "Upload Initial Photos",
            "Upload logo, cover, interior, exterior and team photos with descriptive "
            "filenames. Screenshot the photo gallery.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("claim-gbp",),
        ),
        _task(
            "business-description",
            "Write Business Description",
            "Write a 750-character description covering services, service area and selling "
            "points, without URLs or phone numbers. Screenshot the published text.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            15,
            depends_on=("claim-gbp",),
        ),
        _task(
            "services-products",
            "Set Up Services/Products",
            "Add every service or product with descriptions and prices, grouped into "
            "categories. Screenshot the complete list.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("claim-gbp",),
        ),
        _task(
            "business-hours",
            "Configure Business Hours",
            "Set regular and holiday hours, plus per-service hours where relevant. "
            "Screenshot the hours configuration.",
            TaskCategory.GBP_SETUP,
            EvidenceKind.SCREENSHOT,
            5,
            depends_on=("claim-gbp",),
        ),
        _task(
            "top-citations",
            "Submit to Top Citation Directories",
            "Create listings on the top citation sites (Yelp, Facebook, Apple Maps, Bing "
            "Places, Yellow Pages, industry directories) using the exact NAP. Document URLs.",
            TaskCategory.CITATIONS,
            EvidenceKind.TEXT,
            60,
            depends_on=("validate-nap",),
        ),
        _task(
            "rank-tracking",
            "Set Up Rank Tracking",
            "Add the location to the rank tracker with 5-10 primary keywords, local pack "
            "and organic results. Screenshot the dashboard.",
            TaskCategory.TRACKING,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("claim-gbp",),
        ),
        _task(
            "initial-reviews",
            "Request Initial Reviews",
            "Generate the review short link, prepare a request template and send it to "
            "5-10 initial customers. Document the process.",
            TaskCategory.REVIEWS,
            EvidenceKind.TEXT,
            15,
            required=False,
            approval=True,
            variants=frozenset({TR, GBP}),
            depends_on=("claim-gbp",),
        ),
    ),
)

SUSPENSION_RECOVERY = SOPTemplateEntity(
    id="sop-suspension-recovery",
    name="GBP Suspension Recovery",
    description="Step-by-step process to recover from a Google Business Profile suspension",
    workflow_type=WorkflowType.SUSPENSION_RECOVERY,
    applicable_variants=ALL_VARIANTS,
    tasks=(
        _task(
            "identify-suspension",
            "Identify Suspension Type",
            "Check the suspension notice and email. Record whether it is a soft or hard "
            "suspension and any reason given.",
            TaskCategory.DOCUMENTATION,
            EvidenceKind.TEXT,
            10,
        ),
        _task(
            "risk-checklist",
            "Complete Risk Factor Checklist",
            "Review NAP consistency, keyword stuffing, virtual addresses, duplicate listings, "
            "review manipulation, categories, stock photos and recent edits. Mark what applies.",
            TaskCategory.DOCUMENTATION,
            EvidenceKind.CHECKLIST,
            20,
            depends_on=("identify-suspension",),
        ),
        _task(
            "evidence-documents",
            "Gather Evidence Documents",
            "Collect business license, utility bill, bank statement, storefront and team "
            "photos. Compile into a single file.",
            TaskCategory.DOCUMENTATION,
            EvidenceKind.FILE,
            30,
            variants=frozenset({TR, GBP}),
            depends_on=("identify-suspension",),
        ),
        _task(
            "fix-issues",
            "Fix Identified Issues",
            "Fix every issue from the checklist before requesting reinstatement and "
            "document each fix.",
            TaskCategory.VERIFICATION,
            EvidenceKind.TEXT,
            60,
            depends_on=("risk-checklist",),
        ),
        _task(
            "reinstatement-request",
            "Submit Reinstatement Request",
            "File the reinstatement form with a clear description and the corrective "
            "actions taken; attach evidence. Screenshot the confirmation.",
            TaskCategory.VERIFICATION,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("evidence-documents", "fix-issues"),
        ),
        _task(
            "video-verification",
            "Submit Video Verification (if required)",
            "If requested, record a short video from the public road to the entrance "
            "showing signage, interior and documents. Note submission date and time.",
            TaskCategory.VERIFICATION,
            EvidenceKind.TEXT,
            30,
            required=False,
            variants=frozenset({TR, GBP}),
            depends_on=("reinstatement-request",),
        ),
        _task(
            "post-reinstatement",
            "Post-Reinstatement Cleanup",
            "Re-verify profile information, restore photos, hours and services. Avoid major "
            "changes for 30 days. Screenshot the restored listing.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("reinstatement-request",),
        ),
        _task(
            "monitoring-period",
            "30-Day Monitoring Period",
            "Check status daily for 30 days without editing name or address; respond to "
            "reviews. Document stable status at the end.",
            TaskCategory.TRACKING,
            EvidenceKind.TEXT,
            10,
            depends_on=("post-reinstatement",),
        ),
    ),
)

REBRAND = SOPTemplateEntity(
    id="sop-rebrand",
    name="Rebrand / Business Update",
    description="Checklist for business name changes, moves or major updates",
    workflow_type=WorkflowType.REBRAND,
    applicable_variants=frozenset({TR, GBP}),
    tasks=(
        _task(
            "new-brand-info",
            "Document New Brand Information",
            "Record the new name, address, phone, website, logo and services as an exact "
            "new NAP document.",
            TaskCategory.DOCUMENTATION,
            EvidenceKind.TEXT,
            15,
            approval=True,
            variants=frozenset({TR, GBP}),
        ),
        _task(
            "update-gbp-name",
            "Update Google Business Profile Name",
            "Change the profile to the legal business name only; re-verify if required. "
            "Screenshot before and after.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            10,
            variants=frozenset({TR, GBP}),
            depends_on=("new-brand-info",),
        ),
        _task(
            "update-gbp-address",
            "Update GBP Address",
            "Update the location in USPS format and the service area; expect postcard "
            "re-verification. Screenshot the new settings.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            10,
            required=False,
            variants=frozenset({TR, GBP}),
            depends_on=("new-brand-info",),
        ),
        _task(
            "update-gbp-phone",
            "Update GBP Phone Number",
            "Update primary and additional phone numbers and confirm call tracking. "
            "Screenshot the contact information.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            5,
            required=False,
            variants=frozenset({TR, GBP}),
            depends_on=("new-brand-info",),
        ),
        _task(
            "reevaluate-categories",
            "Re-evaluate Categories",
            "Check the primary category still fits and adjust secondary categories. "
            "Screenshot updated categories.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            15,
            variants=frozenset({TR, GBP}),
            depends_on=("update-gbp-name",),
        ),
        _task(
            "website-branding",
            "Update Website Branding",
            "Update logo, title tags, footer NAP, maps and about page. Screenshot key pages.",
            TaskCategory.WEBSITE,
            EvidenceKind.SCREENSHOT,
            60,
            variants=frozenset({TR}),
            depends_on=("new-brand-info",),
        ),
        _task(
            "schema-markup",
            "Update Schema Markup",
            "Update LocalBusiness schema with the new NAP and sameAs links; validate with "
            "the Rich Results Test. Screenshot results.",
            TaskCategory.WEBSITE,
            EvidenceKind.SCREENSHOT,
            20,
            variants=frozenset({TR}),
            depends_on=("website-branding",),
        ),
        _task(
            "update-citations",
            "Update All Citation Sites",
            "Update NAP on major directories, remove duplicates and old listings, and "
            "document each change.",
            TaskCategory.CITATIONS,
            EvidenceKind.TEXT,
            120,
            variants=frozenset({TR, GBP}),
            depends_on=("new-brand-info",),
        ),
        _task(
            "review-impact",
            "Monitor Review Impact",
            "Watch for reviews mentioning the change, respond professionally and track "
            "review velocity weekly for a month.",
            TaskCategory.REVIEWS,
            EvidenceKind.TEXT,
            15,
            variants=frozenset({TR, GBP}),
            depends_on=("update-gbp-name",),
        ),
        _task(
            "ranking-impact",
            "Track Ranking Impact",
            "Snapshot rankings before the change, monitor weekly and report the before/after "
            "positions after 30 days.",
            TaskCategory.TRACKING,
            EvidenceKind.TEXT,
            20,
            variants=frozenset({TR, GBP}),
            depends_on=("update-gbp-name",),
        ),
    ),
)

MAINTENANCE = SOPTemplateEntity(
    id="sop-maintenance",
    name="Monthly Local SEO Maintenance",
    description="Recurring monthly tasks to maintain and improve local SEO presence",
    workflow_type=WorkflowType.MAINTENANCE,
    applicable_variants=ALL_VARIANTS,
    tasks=(
        _task(
            "gbp-post",
            "Create GBP Post",
            "Publish at least one update, offer or event post with an image and a clear "
            "call to action. Screenshot the post.",
            TaskCategory.CONTENT,
            EvidenceKind.SCREENSHOT,
            15,
        ),
        _task(
            "new-photos",
            "Upload New Photos",
            "Add 2-5 recent photos with descriptive alt text. Screenshot the gallery.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            15,
        ),
        _task(
            "qa-section",
            "Monitor Q&A Section",
            "Answer pending questions, seed common Q&As and report spam. Screenshot activity.",
            TaskCategory.GBP_OPTIMIZATION,
            EvidenceKind.SCREENSHOT,
            10,
        ),
        _task(
            "review-velocity",
            "Check Review Velocity",
            "Compare review totals with last month and competitors; record totals, new "
            "reviews, average rating and negatives needing attention.",
            TaskCategory.REVIEWS,
            EvidenceKind.TEXT,
            10,
        ),
        _task(
            "respond-reviews",
            "Respond to New Reviews",
            "Respond to every unanswered review. Screenshot responses to negative reviews.",
            TaskCategory.REVIEWS,
            EvidenceKind.SCREENSHOT,
            20,
            depends_on=("review-velocity",),
        ),
        _task(
            "competitor-rankings",
            "Check Competitor Rankings",
            "Search the top target keywords and document local pack competitors, their "
            "reviews, posts and photos.",
            TaskCategory.TRACKING,
            EvidenceKind.TEXT,
            20,
        ),
        _task(
            "audit-citations",
            "Audit Citations",
            "Spot-check five major citation sites for NAP accuracy and duplicates. "
            "Document findings.",
            TaskCategory.CITATIONS,
            EvidenceKind.TEXT,
            20,
            required=False,
        ),
        _task(
            "monthly-report",
            "Generate Monthly Report",
            "Report ranking changes, profile insights, review summary, actions taken and "
            "recommendations. Attach the export.",
            TaskCategory.TRACKING,
            EvidenceKind.FILE,
            30,
            depends_on=("review-velocity", "competitor-rankings"),
        ),
    ),
)

BUILTIN_TEMPLATES: tuple[SOPTemplateEntity, ...] = (
    NEW_LOCATION,
    SUSPENSION_RECOVERY,
    REBRAND,
    MAINTENANCE,
)


async def seed_builtin_templates(
    template_repo: ITemplateRepository,
    validator: TemplateValidator | None = None,
) -> int:
    """Validate and store built-in templates that are not stored yet.

    Returns:
        Number of templates added.
    """
    validator = validator or TemplateValidator()
    added = 0
    for template in BUILTIN_TEMPLATES:
        if await template_repo.get_by_id(template.id) is not None:
            continue
        validator.validate(template)
        await template_repo.add(template)
        added += 1
    if added:
        logger.info("Seeded %d built-in SOP template(s)", added)
    return added
