"""
Partner branding value objects.

Outbound emails are branded for the partner program an admin belongs to.
The brand is chosen by the admin's email domain.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from core.domain.value_objects import Email

DEFAULT_FEATURES = (
    "24/7 AI Business Coach",
    "Complete market research, business insights, and strategy",
    "Personalized growth, marketing, and pricing guidance",
    "Goal tracking & accountability",
    "Business templates & step-by-step resources",
)


@dataclass(frozen=True)
class PartnerBrand:
    """Branding of a partner program."""

    slug: str
    ref: str
    program_name: str
    full_name: str
    support_email: str
    logo_initial: str = ""
    primary_color: str = "#1e40af"
    license_duration: str = "1 year"
    job_posts: int = 0
    features: Tuple[str, ...] = field(default=DEFAULT_FEATURES)

    @classmethod
    def from_dict(cls, slug: str, data: Mapping[str, Any]) -> "PartnerBrand":
        """
        Build a brand from a settings entry.

        Args:
            slug: Organization slug used in activation links
            data: Settings mapping for the brand

        Returns:
            PartnerBrand
        """
        program_name = data["program_name"]
        return cls(
            slug=slug,
            ref=data.get("ref", slug),
            program_name=program_name,
            full_name=data.get("full_name", program_name),
            support_email=data["support_email"],
            logo_initial=data.get("logo_initial") or program_name[:1].upper(),
            primary_color=data.get("primary_color", "#1e40af"),
            license_duration=data.get("license_duration", "1 year"),
            job_posts=int(data.get("job_posts", 0)),
            features=tuple(data.get("features", DEFAULT_FEATURES)),
        )

    def template_context(self) -> Dict[str, Any]:
        return {
            "program_name": self.program_name,
            "full_name": self.full_name,
            "support_email": self.support_email,
            "logo_initial": self.logo_initial,
            "primary_color": self.primary_color,
            "license_duration": self.license_duration,
            "job_posts": self.job_posts,
            "features": list(self.features),
        }


class PartnerRegistry:
    """
    Lookup of partner brands by admin email domain.

    Admins whose domain has no brand get the default brand.
    """

    def __init__(self, brands: Mapping[str, PartnerBrand], default: PartnerBrand,
                 domains: Optional[Mapping[str, str]] = None):
        """
        Initialize registry.

        Args:
            brands: Brands keyed by slug
            default: Brand used when no domain matches
            domains: Email domain -> brand slug
        """
        self._brands = dict(brands)
        self._default = default
        self._domains = {d.lower(): slug for d, slug in (domains or {}).items()}

    @classmethod
    def from_settings(cls, config: Mapping[str, Mapping[str, Any]],
                      default_slug: str) -> "PartnerRegistry":
        """
        Build a registry from the ``PARTNER_BRANDS`` setting.

        Each entry is keyed by slug and may list the email ``domains`` it
        covers.
        """
        brands = {slug: PartnerBrand.from_dict(slug, data) for slug, data in config.items()}
        domains = {
            domain: slug
            for slug, data in config.items()
            for domain in data.get("domains", ())
        }
        return cls(brands, brands[default_slug], domains)

    @property
    def default(self) -> PartnerBrand:
        return self._default

    def for_email(self, email) -> PartnerBrand:
        if isinstance(email, Email):
            domain = email.domain
        else:
            domain = str(email).rsplit("@", 1)[-1].lower()
        slug = self._domains.get(domain)
        return self._brands.get(slug, self._default) if slug else self._default
