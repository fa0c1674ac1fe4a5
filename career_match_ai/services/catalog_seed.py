"""Sample career catalog and seeding into a CatalogStore (with batch embeddings)."""

from typing import List, Optional

from career_match_ai.embeddings.embedding_service import EmbeddingService, career_embedding_text
from career_match_ai.schemas.career import Career
from career_match_ai.storage.base import CatalogStore
from career_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _growth(*steps: tuple) -> list:
    return [
        {"level": level, "title": title, "salary_range": {"min": lo, "max": hi}, "experience": exp}
        for level, title, lo, hi, exp in steps
    ]


# Sample careers for the Indian job market (salaries in lakhs per annum)
SEED_CAREERS: List[dict] = [
    {
        "title": "Full Stack Developer",
        "description": (
            "Build end-to-end web applications using modern technologies like React, Node.js, and cloud "
            "platforms. Work with both frontend and backend systems to create scalable solutions."
        ),
        "requirements": [
            "Develop responsive web applications using React, Angular, or Vue.js",
            "Build RESTful APIs and microservices using Node.js, Python, or Java",
            "Deploy applications on cloud platforms like AWS, Azure, or GCP",
        ],
        "skills": [
            {"name": "React", "level": "advanced", "category": "technical"},
            {"name": "Node.js", "level": "advanced", "category": "technical"},
            {"name": "JavaScript", "level": "expert", "category": "technical"},
            {"name": "TypeScript", "level": "intermediate", "category": "technical"},
            {"name": "MongoDB", "level": "intermediate", "category": "technical"},
            {"name": "Git", "level": "advanced", "category": "technical"},
            {"name": "Problem Solving", "level": "advanced", "category": "soft"},
        ],
        "salary_range": {"min": 8, "max": 15, "currency": "INR_LPA"},
        "locations": ["Mumbai", "Bangalore", "Hyderabad", "Delhi", "Pune", "Chennai"],
        "industry": "Technology",
        "growth_path": _growth(
            ("Junior", "Junior Full Stack Developer", 4, 8, "0-2 years"),
            ("Mid", "Full Stack Developer", 8, 15, "2-5 years"),
            ("Senior", "Senior Full Stack Developer", 15, 25, "5-8 years"),
            ("Lead", "Tech Lead", 25, 40, "8+ years"),
        ),
    },
    {
        "title": "Data Scientist",
        "description": (
            "Analyze large datasets to extract meaningful insights and build predictive models. Use "
            "statistical methods and machine learning to solve complex business problems."
        ),
        "requirements": [
            "Collect, clean, and analyze large datasets from various sources",
            "Build machine learning models for prediction and classification",
            "Communicate findings to non-technical stakeholders",
        ],
        "skills": [
            {"name": "Python", "level": "expert", "category": "technical"},
            {"name": "SQL", "level": "advanced", "category": "technical"},
            {"name": "Machine Learning", "level": "advanced", "category": "technical"},
            {"name": "Pandas", "level": "expert", "category": "technical"},
            {"name": "Statistics", "level": "advanced", "category": "domain"},
            {"name": "Critical Thinking", "level": "advanced", "category": "soft"},
        ],
        "salary_range": {"min": 12, "max": 25, "currency": "INR_LPA"},
        "locations": ["Bangalore", "Mumbai", "Hyderabad", "Delhi", "Pune"],
        "industry": "Technology",
        "growth_path": _growth(
            ("Junior", "Junior Data Scientist", 6, 12, "0-2 years"),
            ("Mid", "Data Scientist", 12, 25, "2-5 years"),
            ("Senior", "Senior Data Scientist", 25, 40, "5-8 years"),
        ),
    },
    {
        "title": "Digital Marketing Manager",
        "description": (
            "Develop and execute digital marketing strategies across social media, search engines, and "
            "email marketing to drive brand awareness and customer acquisition."
        ),
        "requirements": [
            "Plan and execute digital marketing campaigns across platforms",
            "Optimize website and content for search engines (SEO)",
            "Analyze campaign performance and ROI metrics",
        ],
        "skills": [
            {"name": "Google Analytics", "level": "advanced", "category": "technical"},
            {"name": "Social Media Marketing", "level": "expert", "category": "domain"},
            {"name": "SEO", "level": "advanced", "category": "domain"},
            {"name": "Content Marketing", "level": "advanced", "category": "domain"},
            {"name": "Leadership", "level": "advanced", "category": "soft"},
        ],
        "salary_range": {"min": 10, "max": 20, "currency": "INR_LPA"},
        "locations": ["Mumbai", "Delhi", "Bangalore", "Pune"],
        "industry": "Marketing",
        "growth_path": _growth(
            ("Associate", "Digital Marketing Associate", 4, 8, "0-2 years"),
            ("Manager", "Digital Marketing Manager", 10, 20, "3-6 years"),
            ("Head", "Head of Digital Marketing", 20, 35, "6+ years"),
        ),
    },
    {
        "title": "UI/UX Designer",
        "description": (
            "Create intuitive and visually appealing user interfaces and experiences for web and mobile "
            "applications. Conduct user research and testing to inform design decisions."
        ),
        "requirements": [
            "Design user interfaces for web and mobile applications",
            "Create wireframes, prototypes, and design systems",
        ],
        "skills": [
            {"name": "Figma", "level": "expert", "category": "technical"},
            {"name": "User Research", "level": "advanced", "category": "domain"},
            {"name": "Prototyping", "level": "expert", "category": "domain"},
            {"name": "HTML/CSS", "level": "intermediate", "category": "technical"},
            {"name": "Empathy", "level": "advanced", "category": "soft"},
        ],
        "salary_range": {"min": 8, "max": 18, "currency": "INR_LPA"},
        "locations": ["Bangalore", "Mumbai", "Delhi", "Pune", "Hyderabad", "Chennai"],
        "industry": "Design",
        "growth_path": _growth(
            ("Junior", "Junior UI/UX Designer", 4, 8, "0-2 years"),
            ("Mid", "UI/UX Designer", 8, 18, "2-5 years"),
            ("Lead", "Design Lead", 25, 45, "8+ years"),
        ),
    },
    {
        "title": "DevOps Engineer",
        "description": (
            "Automate and optimize software deployment, infrastructure management, and CI/CD processes "
            "to ensure reliable and scalable systems."
        ),
        "requirements": [
            "Design and maintain CI/CD pipelines for automated deployments",
            "Manage cloud infrastructure on AWS, Azure, or Google Cloud",
            "Automate infrastructure provisioning using Infrastructure as Code",
        ],
        "skills": [
            {"name": "AWS", "level": "advanced", "category": "technical"},
            {"name": "Docker", "level": "advanced", "category": "technical"},
            {"name": "Kubernetes", "level": "advanced", "category": "technical"},
            {"name": "Linux", "level": "expert", "category": "technical"},
            {"name": "Python", "level": "intermediate", "category": "technical"},
            {"name": "Problem Solving", "level": "expert", "category": "soft"},
        ],
        "salary_range": {"min": 12, "max": 22, "currency": "INR_LPA"},
        "locations": ["Bangalore", "Hyderabad", "Mumbai", "Delhi", "Pune"],
        "industry": "Technology",
        "growth_path": _growth(
            ("Junior", "Junior DevOps Engineer", 6, 12, "0-2 years"),
            ("Mid", "DevOps Engineer", 12, 22, "2-5 years"),
        ),
    },
]


def seed_career_records() -> List[Career]:
    """SEED_CAREERS validated as Career models (no embeddings yet)."""
    return [Career.model_validate(c) for c in SEED_CAREERS]


def seed_careers(
    store: CatalogStore,
    embedding_service: EmbeddingService,
    careers: Optional[List[Career]] = None,
) -> List[Career]:
    """
    Embed careers (default: SEED_CAREERS) with the batch call and insert them.
    A career whose embedding fails is stored with a zero vector.
    """
    careers = careers if careers is not None else seed_career_records()
    if not careers:
        return []
    vectors = embedding_service.generate_batch_embeddings([career_embedding_text(c) for c in careers])
    with_embeddings = [c.model_copy(update={"embedding": v}) for c, v in zip(careers, vectors)]
    created = store.create_careers(with_embeddings)
    industries = sorted({c.industry for c in created if c.industry})
    logger.info("Seeded %s careers (industries: %s)", len(created), ", ".join(industries))
    return created
