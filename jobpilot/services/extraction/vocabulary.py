# =============================================================================
# Extraction Vocabularies
# =============================================================================
"""
Fixed word lists shared by the extraction engine.

Everything here is read-only data loaded once at import time: the skill
vocabularies, US state names, boilerplate phrases and the hosts that are
known not to belong to a hiring company.
"""


# -----------------------------------------------------------------------------
# Skills
# -----------------------------------------------------------------------------
JOB_SKILLS: tuple[str, ...] = (
    "JavaScript", "TypeScript", "React", "Next.js", "Node.js", "Express",
    "MongoDB", "SQL", "PostgreSQL", "MySQL", "Python", "Java",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "REST",
    "GraphQL", "HTML", "CSS", "Tailwind", "Git", "CI/CD",
    "Redux", "Jest",
)

# Used for resume/job analysis summaries, so soft skills are included
ANALYSIS_SKILLS: tuple[str, ...] = (
    "javascript", "typescript", "react", "next.js", "node.js", "express",
    "mongodb", "sql", "postgresql", "mysql", "python", "java", "c++",
    "aws", "azure", "gcp", "docker", "kubernetes", "rest", "graphql",
    "html", "css", "tailwind", "redux", "git", "ci/cd", "jest", "testing",
    "communication", "problem solving", "data structures", "algorithms",
)

JOB_SKILL_LIMIT = 25
ANALYSIS_SKILL_LIMIT = 6
STRUCTURED_SKILL_LIMIT = 20


# -----------------------------------------------------------------------------
# Locations
# -----------------------------------------------------------------------------
US_STATE_NAMES: tuple[str, ...] = (
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota",
    "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada",
    "New Hampshire", "New Jersey", "New Mexico", "New York",
    "North Carolina", "North Dakota", "Ohio", "Oklahoma", "Oregon",
    "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
)

LOCATION_SUGGESTIONS: tuple[str, ...] = US_STATE_NAMES + ("Remote",)

KNOWN_PLACES: tuple[str, ...] = (
    "bengaluru", "bangalore", "hyderabad", "noida", "gurgaon", "gurugram",
    "pune", "mumbai", "chennai", "delhi", "india", "usa", "uk",
    "united states", "united kingdom", "london", "new york", "san francisco",
    "seattle", "austin", "boston", "chicago", "toronto", "berlin",
)

WORK_MODES: tuple[str, ...] = ("remote", "hybrid", "on-site", "onsite")


# -----------------------------------------------------------------------------
# Boilerplate
# -----------------------------------------------------------------------------
NOISE_PHRASES: tuple[str, ...] = (
    "privacy", "cookie", "terms", "equal opportunity", "accessibility",
    "copyright", "sign in", "create account", "menu", "navigation",
    "follow us", "adsbygoogle", "click here", "telegram group",
    "whatsapp group", "all jobs", "share on", "share this",
)

# Hosts that publish listings for other companies
NON_COMPANY_HOSTS: tuple[str, ...] = (
    "jobdrives", "kickcharm", "offcampus", "blog", "wordpress", "medium",
)

# Leading host labels that never name the company
GENERIC_HOST_LABELS: tuple[str, ...] = (
    "www", "jobs", "careers", "boards", "job-boards", "apply",
)

DESCRIPTION_SIGNALS: tuple[str, ...] = (
    "responsibilit", "requirement", "qualification", "experience", "skills",
    "about the role", "what you'll do", "what you’ll do", "what you will do",
)

APPLY_MARKERS: tuple[str, ...] = (
    "Apply for this job", "* indicates a required field", "Submit application",
)
