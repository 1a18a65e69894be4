"""
Classification rule table

Declaration order is precedence order: within a category the first rule whose
keywords or error codes match wins, and the rule without predicates is the
category's fallback. The table is a tuple of frozen models built once at import.
"""
from typing import Tuple

from intake_gateway.models.classification import ClassificationRule, Resource

# Category labels offered by the intake form
GOOGLE_WORKSPACE_ACCOUNT_ACCESS = "Google Workspace – Account Access"
GOOGLE_WORKSPACE_GROUPS = "Google Workspace – Groups & Permissions"
HUBSPOT_LIFECYCLE = "HubSpot – Lifecycle & Automation"
HUBSPOT_EMAIL = "HubSpot – Email Deliverability"
BUILDERTREND_ESTIMATES = "Buildertrend – Estimates & Proposals"
BUILDERTREND_DAILY_LOGS = "Buildertrend – Daily Logs & Timecards"
APPLE_DEVICE_ENROLLMENT = "Apple Business Essentials – Device Enrollment"
WEBSITE_DNS = "Website – DNS & Email Routing"
WEBSITE_CONTENT = "Website – Content & Layout"
INTEGRATIONS_AUTOMATION = "Integrations – Automation / Zapier / Make"
OTHER = "Other"

CATEGORIES: Tuple[str, ...] = (
    GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
    GOOGLE_WORKSPACE_GROUPS,
    HUBSPOT_LIFECYCLE,
    HUBSPOT_EMAIL,
    BUILDERTREND_ESTIMATES,
    BUILDERTREND_DAILY_LOGS,
    APPLE_DEVICE_ENROLLMENT,
    WEBSITE_DNS,
    WEBSITE_CONTENT,
    INTEGRATIONS_AUTOMATION,
    OTHER,
)

GOOGLE_ADMIN_HELP = Resource(type="doc", label="Google Workspace Admin Help", url="https://support.google.com/a")

GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES: Tuple[Resource, ...] = (
    Resource(
        type="doc",
        label="Google Workspace Account Access Troubleshooting",
        url="https://support.google.com/a/answer/1728857",
    ),
    Resource(
        type="doc",
        label="Reset Google Workspace User Password",
        url="https://support.google.com/a/answer/33319",
    ),
    Resource(
        type="video",
        label="Google Workspace Admin Console Walkthrough",
        url="https://www.loom.com/share/google-workspace-admin-console",
    ),
    Resource(
        type="doc",
        label="Two-Factor Authentication Setup Guide",
        url="https://support.google.com/a/answer/175197",
    ),
)


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    # Google Workspace – Account Access
    ClassificationRule(
        category=GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
        keywords=("password", "login", "access", "account", "locked", "reset"),
        topic="Google Workspace Account Access",
        resources=GOOGLE_WORKSPACE_ACCOUNT_ACCESS_RESOURCES,
    ),
    ClassificationRule(
        category=GOOGLE_WORKSPACE_ACCOUNT_ACCESS,
        topic="General Google Workspace Account Access Support",
        resources=(GOOGLE_ADMIN_HELP,),
    ),

    # Google Workspace – Groups & Permissions
    ClassificationRule(
        category=GOOGLE_WORKSPACE_GROUPS,
        keywords=("group", "permission", "share", "access", "member"),
        topic="Google Workspace Groups & Permissions",
        resources=(
            Resource(type="doc", label="Manage Google Groups", url="https://support.google.com/a/answer/167100"),
            Resource(
                type="doc",
                label="Share Files and Folders in Google Drive",
                url="https://support.google.com/drive/answer/7166529",
            ),
            Resource(
                type="video",
                label="Google Workspace Permissions Overview",
                url="https://www.loom.com/share/google-workspace-permissions",
            ),
        ),
    ),
    ClassificationRule(
        category=GOOGLE_WORKSPACE_GROUPS,
        topic="General Google Workspace Groups & Permissions Support",
        resources=(GOOGLE_ADMIN_HELP,),
    ),

    # HubSpot – Lifecycle & Automation
    ClassificationRule(
        category=HUBSPOT_LIFECYCLE,
        keywords=("lifecycle", "workflow", "automation", "deal stage", "pipeline", "enrollment"),
        error_codes=("WF-", "HS-WF"),
        topic="HubSpot Lifecycle & Automation",
        resources=(
            Resource(
                type="doc",
                label="HubSpot Lifecycle Playbook",
                url="https://docs.example.com/hubspot-lifecycle-playbook",
            ),
            Resource(
                type="video",
                label="HubSpot Workflow Debug Walkthrough",
                url="https://www.loom.com/share/hubspot-workflow-debug",
            ),
            Resource(
                type="doc",
                label="HubSpot Automation Best Practices",
                url="https://docs.example.com/hubspot-automation-best-practices",
            ),
        ),
    ),
    ClassificationRule(
        category=HUBSPOT_LIFECYCLE,
        topic="General HubSpot Lifecycle & Automation Support",
        resources=(
            Resource(
                type="doc",
                label="HubSpot Lifecycle & Automation Documentation",
                url="https://docs.example.com/hubspot-lifecycle-automation",
            ),
        ),
    ),

    # HubSpot – Email Deliverability
    ClassificationRule(
        category=HUBSPOT_EMAIL,
        keywords=("bounce", "delivery", "spam", "dkim", "spf", "email", "send"),
        error_codes=("Bounce", "5.1.0", "5.7.1"),
        topic="HubSpot Email Deliverability",
        resources=(
            Resource(
                type="doc",
                label="HubSpot Email Deliverability Guide",
                url="https://docs.example.com/hubspot-email-deliverability",
            ),
            Resource(
                type="doc",
                label="SPF and DKIM Configuration for HubSpot",
                url="https://docs.example.com/hubspot-spf-dkim",
            ),
            Resource(
                type="video",
                label="Troubleshooting Email Bounces",
                url="https://www.loom.com/share/hubspot-email-bounces",
            ),
        ),
    ),
    ClassificationRule(
        category=HUBSPOT_EMAIL,
        topic="General HubSpot Email Deliverability Support",
        resources=(
            Resource(
                type="doc",
                label="HubSpot Email Deliverability Documentation",
                url="https://docs.example.com/hubspot-email-deliverability-docs",
            ),
        ),
    ),

    # Buildertrend – Estimates & Proposals
    ClassificationRule(
        category=BUILDERTREND_ESTIMATES,
        keywords=("estimate", "proposal", "quote", "bid", "pricing"),
        topic="Buildertrend Estimates & Proposals",
        resources=(
            Resource(
                type="doc",
                label="Buildertrend Estimates Guide",
                url="https://docs.example.com/buildertrend-estimates",
            ),
            Resource(
                type="video",
                label="Creating Proposals in Buildertrend",
                url="https://www.loom.com/share/buildertrend-proposals",
            ),
            Resource(
                type="doc",
                label="Buildertrend Pricing Best Practices",
                url="https://docs.example.com/buildertrend-pricing",
            ),
        ),
    ),
    ClassificationRule(
        category=BUILDERTREND_ESTIMATES,
        topic="General Buildertrend Estimates & Proposals Support",
        resources=(
            Resource(
                type="doc",
                label="Buildertrend Estimates & Proposals Documentation",
                url="https://docs.example.com/buildertrend-estimates-docs",
            ),
        ),
    ),

    # Buildertrend – Daily Logs & Timecards
    ClassificationRule(
        category=BUILDERTREND_DAILY_LOGS,
        keywords=("log", "timecard", "time", "hours", "attendance", "daily"),
        topic="Buildertrend Daily Logs & Timecards",
        resources=(
            Resource(
                type="doc",
                label="Buildertrend Daily Logs Guide",
                url="https://docs.example.com/buildertrend-daily-logs",
            ),
            Resource(
                type="video",
                label="Timecard Management in Buildertrend",
                url="https://www.loom.com/share/buildertrend-timecards",
            ),
            Resource(
                type="doc",
                label="Buildertrend Time Tracking Best Practices",
                url="https://docs.example.com/buildertrend-time-tracking",
            ),
        ),
    ),
    ClassificationRule(
        category=BUILDERTREND_DAILY_LOGS,
        topic="General Buildertrend Daily Logs & Timecards Support",
        resources=(
            Resource(
                type="doc",
                label="Buildertrend Daily Logs & Timecards Documentation",
                url="https://docs.example.com/buildertrend-logs-timecards-docs",
            ),
        ),
    ),

    # Apple Business Essentials – Device Enrollment
    ClassificationRule(
        category=APPLE_DEVICE_ENROLLMENT,
        keywords=("iphone", "ipad", "device", "enrollment", "mdm", "enroll"),
        topic="Apple Business Essentials Device Enrollment",
        resources=(
            Resource(
                type="doc",
                label="Apple Business Essentials Device Enrollment",
                url="https://docs.example.com/apple-device-enrollment",
            ),
            Resource(
                type="video",
                label="MDM Configuration Walkthrough",
                url="https://www.loom.com/share/apple-mdm-config",
            ),
            Resource(
                type="doc",
                label="Device Enrollment Troubleshooting",
                url="https://docs.example.com/apple-enrollment-troubleshooting",
            ),
        ),
    ),
    ClassificationRule(
        category=APPLE_DEVICE_ENROLLMENT,
        topic="General Apple Business Essentials Device Enrollment Support",
        resources=(
            Resource(
                type="doc",
                label="Apple Business Essentials Device Enrollment Documentation",
                url="https://docs.example.com/apple-device-enrollment-docs",
            ),
        ),
    ),

    # Website – DNS & Email Routing
    ClassificationRule(
        category=WEBSITE_DNS,
        keywords=("dns", "domain", "mx", "spf", "dkim", "email routing", "nameserver"),
        topic="Website DNS & Email Routing",
        resources=(
            Resource(type="doc", label="DNS Configuration Guide", url="https://docs.example.com/dns-configuration"),
            Resource(type="doc", label="Email Routing Setup", url="https://docs.example.com/email-routing-setup"),
            Resource(
                type="video",
                label="DNS Record Management Tutorial",
                url="https://www.loom.com/share/dns-management",
            ),
        ),
    ),
    ClassificationRule(
        category=WEBSITE_DNS,
        topic="General Website DNS & Email Routing Support",
        resources=(
            Resource(
                type="doc",
                label="Website DNS & Email Routing Documentation",
                url="https://docs.example.com/website-dns-email-docs",
            ),
        ),
    ),

    # Website – Content & Layout
    ClassificationRule(
        category=WEBSITE_CONTENT,
        keywords=("layout", "design", "css", "styling", "responsive", "content", "page"),
        topic="Website Content & Layout",
        resources=(
            Resource(
                type="doc",
                label="Website Design Guidelines",
                url="https://docs.example.com/website-design-guidelines",
            ),
            Resource(
                type="video",
                label="Responsive Design Best Practices",
                url="https://www.loom.com/share/responsive-design",
            ),
            Resource(
                type="doc",
                label="Content Management Best Practices",
                url="https://docs.example.com/content-management",
            ),
        ),
    ),
    ClassificationRule(
        category=WEBSITE_CONTENT,
        topic="General Website Content & Layout Support",
        resources=(
            Resource(
                type="doc",
                label="Website Content & Layout Documentation",
                url="https://docs.example.com/website-content-layout-docs",
            ),
        ),
    ),

    # Integrations – Automation / Zapier / Make
    ClassificationRule(
        category=INTEGRATIONS_AUTOMATION,
        keywords=("zapier", "make", "automation", "workflow", "trigger", "action"),
        topic="Integrations Automation (Zapier / Make)",
        resources=(
            Resource(type="doc", label="Zapier Integration Guide", url="https://docs.example.com/zapier-integration"),
            Resource(
                type="doc",
                label="Make (Integromat) Automation Guide",
                url="https://docs.example.com/make-automation",
            ),
            Resource(
                type="video",
                label="Building Automation Workflows",
                url="https://www.loom.com/share/automation-workflows",
            ),
        ),
    ),
    ClassificationRule(
        category=INTEGRATIONS_AUTOMATION,
        keywords=("api", "webhook", "sync", "connection", "integration"),
        topic="Integration Setup & Configuration",
        resources=(
            Resource(type="doc", label="Integration Setup Guide", url="https://docs.example.com/integration-setup"),
            Resource(
                type="video",
                label="Webhook Configuration Tutorial",
                url="https://www.loom.com/share/webhook-config",
            ),
        ),
    ),
    ClassificationRule(
        category=INTEGRATIONS_AUTOMATION,
        keywords=("error", "failed", "timeout", "authentication"),
        topic="Integration Errors",
        resources=(
            Resource(
                type="doc",
                label="Integration Error Troubleshooting",
                url="https://docs.example.com/integration-errors",
            ),
        ),
    ),
    ClassificationRule(
        category=INTEGRATIONS_AUTOMATION,
        topic="General Integration Automation Support",
        resources=(
            Resource(
                type="doc",
                label="Integration Automation Documentation",
                url="https://docs.example.com/integration-automation-docs",
            ),
        ),
    ),

    # Other (generic fallback only)
    ClassificationRule(
        category=OTHER,
        topic="General Support",
        resources=(
            Resource(type="doc", label="General Support Documentation", url="https://docs.example.com/general-support"),
        ),
    ),
)
