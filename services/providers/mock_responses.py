"""Canned legal guidance used by the simulated provider.

Rules are evaluated top to bottom and the first match wins, so the order of
`RESPONSE_RULES` is part of the behavior. A question mentioning a "car
accident" is answered by the personal injury rule because it matches
"accident" first.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

CONSULTATION_DISCLAIMER = (
    "**Disclaimer**: This is general legal information only, not legal advice. "
    "Laws vary by jurisdiction and individual circumstances matter. For advice about "
    "your situation, please consult a qualified attorney licensed in your area."
)


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Return a predicate matching lower-cased text that contains any keyword."""
    return lambda text: any(keyword in text for keyword in keywords)


@dataclass(frozen=True)
class ResponseRule:
    """One keyword category and the guidance returned when it matches."""

    name: str
    matches: Callable[[str], bool]
    template: str


CONTRACT_TEMPLATE = """Based on your question about contracts, here's some general guidance:

**Key Contract Elements**: Every valid contract needs offer, acceptance, consideration, and mutual agreement. Before signing any contract, carefully review all terms and conditions.

**Important Considerations**:
- Read all fine print and understand cancellation policies
- Ensure all verbal agreements are included in writing
- Consider having complex contracts reviewed by a qualified attorney"""

EMPLOYMENT_TEMPLATE = """Regarding your employment law question:

**Employee Rights**: You have rights to a safe workplace, fair wages, and protection from discrimination. Employment laws vary by state and jurisdiction.

**Common Issues**:
- Wage and hour disputes should be documented carefully
- Workplace harassment should be reported through proper channels
- Wrongful termination may have legal remedies available

**Next Steps**: Keep detailed records of any workplace issues. For serious matters, an employment law attorney can advise you based on your specific situation."""

LANDLORD_TENANT_TEMPLATE = """For your landlord-tenant question:

**Tenant Rights**: You generally have rights to habitable living conditions, proper notice before entry, and return of your security deposit (subject to legitimate deductions).

**Important Points**:
- Document all communications with your landlord in writing
- Know your local rent control and eviction laws
- Security deposits typically must be returned within 14-30 days

**Local Help**: Landlord-tenant law varies significantly by location. A local tenant rights organization can give guidance specific to your area."""

PERSONAL_INJURY_TEMPLATE = """Regarding your accident or injury question:

**Immediate Steps**:
- Seek medical attention if injured, even if injuries seem minor
- Document everything: photos, witness information, police reports
- Notify your insurance company promptly

**Important Considerations**:
- Keep all medical records and receipts related to the incident
- Avoid admitting fault or signing anything without legal review
- Be cautious with recorded statements to insurance companies

**Time Limits**: Personal injury claims have deadlines for filing. Consider a case evaluation with a personal injury attorney, especially for serious injuries."""

FAMILY_LAW_TEMPLATE = """For your family law matter:

**Family Law Basics**: Family law covers divorce, child custody, support, and domestic relations. These matters are typically handled in state courts with specific procedures.

**Key Considerations**:
- A child's best interests are paramount in custody decisions
- Financial records are crucial for support calculations
- Mediation may be required before court proceedings

**Professional Guidance**: Family law matters are emotionally challenging and legally complex. A family law attorney can explain your rights and options under your state's laws."""

PARKING_TEMPLATE = """Regarding your parking ticket question:

**Parking Ticket Options**:
- Pay the fine by the due date to avoid additional penalties
- Contest the ticket if you believe it was issued in error
- Request a hearing to present your case

**Common Defenses**:
- Faulty or missing signage
- Meter malfunction (keep receipts and photos as evidence)
- Medical emergency or vehicle breakdown
- Incorrect information on the ticket

**Important Deadlines**: Most jurisdictions have strict deadlines for contesting tickets (usually 21-30 days). Missing them can add fines and penalties.

**Documentation**: If contesting, gather photos of the signage, the parking area, meter receipts, and any other relevant evidence."""

LEGAL_NOTICE_TEMPLATE = """Regarding your legal notice:

**Immediate Action Required**: Legal notices typically have strict deadlines. Do not ignore them.

**Types of Legal Notices**:
- Court summons: You must appear or respond by the specified date
- Subpoenas: You're required to appear as a witness or provide documents
- Demand letters: Someone is making a legal claim against you
- Eviction notices: A landlord is starting eviction proceedings

**Critical Steps**:
- Read the entire document carefully
- Note all deadlines and required actions
- Respond by the deadline, even if just to request more time
- Keep copies of all documents

**Warning**: Failing to respond to a legal notice can result in default judgments, evictions, or other serious consequences. Contact an attorney promptly."""

VEHICLE_ACCIDENT_TEMPLATE = """Regarding your car accident:

**Immediate Steps at the Scene**:
- Ensure everyone's safety and call 911 if anyone is injured
- Call the police to file an accident report
- Exchange insurance and contact information with other drivers
- Take photos of vehicles, damage, license plates, and the scene
- Get contact information from witnesses

**Important Documentation**:
- Police report number
- Other driver's insurance information
- Medical records if injured
- Repair estimates and receipts

**Insurance Claims**: Report the accident to your insurer promptly. Be honest but stick to facts and avoid admitting fault.

**Time Limits**: Injury claims have statute of limitations deadlines that vary by state."""

LEGALITY_TEMPLATE = """Regarding legal vs illegal activities:

**Understanding Legality**:
- Laws vary significantly by jurisdiction (federal, state, local)
- What's legal in one place may be illegal in another
- Laws change over time through legislation and court decisions
- Ignorance of the law is generally not a defense

**Research Resources**:
- Local and state government websites
- Legal databases and law libraries
- Bar association referral services

**When in Doubt**: Research the applicable laws in your jurisdiction, contact the relevant government agency, and err on the side of caution."""

CRIMINAL_TEMPLATE = """Regarding your criminal law question:

**Constitutional Rights**:
- Right to remain silent - use it
- Right to an attorney - request one immediately
- Right to refuse searches without a warrant

**If Arrested**:
- Don't resist, even if you believe the arrest is wrong
- Don't discuss your case with anyone except your attorney
- Contact a criminal defense lawyer as soon as possible

**Critical**: Criminal matters have serious consequences. Do not attempt to handle charges or an investigation without legal representation."""

GENERAL_TEMPLATE = """Thank you for your legal question. Here's some general guidance:

**General Legal Principles**:
- Laws vary significantly by jurisdiction and change frequently
- Documentation and evidence are crucial in legal matters
- Time limits (statutes of limitations) apply to most legal claims

**Recommended Actions**:
- Gather and preserve all relevant documents and evidence
- Keep detailed records of dates, communications, and events
- Research your local laws or consult legal resources

Would you like me to help you find resources for legal assistance in your area?"""

RESPONSE_RULES: Tuple[ResponseRule, ...] = (
    ResponseRule("contract", contains_any("contract", "agreement"), CONTRACT_TEMPLATE),
    ResponseRule("employment", contains_any("employment", "workplace", "job"), EMPLOYMENT_TEMPLATE),
    ResponseRule("landlord_tenant", contains_any("rent", "landlord", "tenant", "lease"), LANDLORD_TENANT_TEMPLATE),
    ResponseRule("personal_injury", contains_any("accident", "injury", "insurance"), PERSONAL_INJURY_TEMPLATE),
    ResponseRule("family_law", contains_any("divorce", "custody", "family"), FAMILY_LAW_TEMPLATE),
    ResponseRule(
        "parking_violation",
        contains_any("parking ticket", "parking violation", "parking fine"),
        PARKING_TEMPLATE,
    ),
    ResponseRule(
        "legal_notice",
        contains_any("legal notice", "court notice", "summons", "subpoena"),
        LEGAL_NOTICE_TEMPLATE,
    ),
    ResponseRule(
        "vehicle_accident",
        contains_any("car crash", "car accident", "auto accident", "vehicle accident"),
        VEHICLE_ACCIDENT_TEMPLATE,
    ),
    ResponseRule("legality", contains_any("legal", "illegal", "lawful", "unlawful"), LEGALITY_TEMPLATE),
    ResponseRule("criminal", contains_any("criminal", "arrest", "police"), CRIMINAL_TEMPLATE),
)


def match_rule(user_input: str) -> Optional[ResponseRule]:
    """Return the first rule matching the input, or None for the generic answer."""
    text = (user_input or "").lower()
    for rule in RESPONSE_RULES:
        if rule.matches(text):
            return rule
    return None


def build_mock_response(user_input: str) -> str:
    """Return the canned answer for the input with the consultation disclaimer appended."""
    rule = match_rule(user_input)
    body = rule.template if rule else GENERAL_TEMPLATE
    return f"{body}\n\n{CONSULTATION_DISCLAIMER}"


IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}


def build_mock_image_analysis(file_name: str) -> str:
    """Return a templated description chosen by the file extension only."""
    extension = file_name.lower().rsplit(".", 1)[-1] if "." in file_name else ""

    if extension in IMAGE_EXTENSIONS:
        return f"""**Document Analysis** (Mock Demo):

I can see you've uploaded an image file "{file_name}". In a production environment, this would be analyzed by the vision model to extract text, identify document types, and understand visual legal content.

**Potential Document Types**:
- Contract or agreement pages
- Court documents or legal notices
- Insurance forms or claims
- Property documents or leases

**Next Steps**: For actual document analysis, please ensure documents are clear and readable.

*Note: This is a demonstration response. Real document analysis requires the vision model to be active.*"""

    return f"""**Image Analysis** (Mock Demo):

I can see you've uploaded "{file_name}". In production mode, the vision model would analyze this image for legal relevance, such as:

- Accident scene documentation
- Property damage assessment
- Evidence preservation
- Incident documentation

**Legal Context**: If this relates to a legal matter, keep copies and backup documentation of the original.

*Note: This is a demonstration. Full image analysis requires the complete AI system to be operational.*"""
