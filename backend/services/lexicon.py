"""Static lexicon tables for skill detection.

Technology keyword aliases, stack archetype patterns and job-role skill
maps. Tables are read-only mappings of tuples; dict order is significant
(detection order and archetype priority follow it).
"""

from __future__ import annotations

from types import MappingProxyType

# Technology -> lowercase alias substrings matched against repo text
FRAMEWORK_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "React": ("react", "reactjs"),
        "Next.js": ("next.js", "nextjs"),
        "Gatsby": ("gatsby",),
        "Angular": ("angular", "@angular"),
        "Vue": ("vue", "vuejs"),
        "Nuxt.js": ("nuxt",),
        "Vite": ("vite",),
        "Django": ("django",),
        "Flask": ("flask",),
        "FastAPI": ("fastapi",),
        "Express": ("express", "expressjs"),
        "NestJS": ("nestjs", "@nestjs"),
        "Spring": ("spring", "springboot", "spring-boot"),
        "Laravel": ("laravel",),
        "Rails": ("rails", "ruby-on-rails"),
        "ASP.NET": ("asp.net", "aspnet"),
        "Flutter": ("flutter",),
        "React Native": ("react-native",),
        "TensorFlow": ("tensorflow",),
        "PyTorch": ("pytorch",),
        "Kubernetes": ("kubernetes", "k8s"),
        "Docker": ("docker",),
        "AWS": ("aws", "amazon-web-services"),
        "Azure": ("azure",),
        "GCP": ("gcp", "google-cloud"),
        "MongoDB": ("mongodb", "mongo"),
        "PostgreSQL": ("postgresql", "postgres"),
        "MySQL": ("mysql",),
        "Redis": ("redis",),
        "Node": ("node.js", "nodejs"),
        "GraphQL": ("graphql",),
        "Tailwind": ("tailwind", "tailwindcss"),
        "Bootstrap": ("bootstrap",),
        "Material-UI": ("material-ui", "mui"),
    }
)

# Tool -> aliases. "tracked" tools also feed archetype detection.
TOOL_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "Docker": ("docker",),
        "Kubernetes": ("kubernetes", "k8s"),
        "Git": ("git",),
        "CI/CD": ("ci/cd", "github-actions"),
        "Terraform": ("terraform",),
        "Ansible": ("ansible",),
    }
)
TRACKED_TOOLS = frozenset({"Docker", "Kubernetes", "Terraform"})

# Archetype -> required component technologies
STACK_PATTERNS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "MERN": ("MongoDB", "Express", "React", "Node"),
        "MEAN": ("MongoDB", "Express", "Angular", "Node"),
        "MEVN": ("MongoDB", "Express", "Vue", "Node"),
        "PERN": ("PostgreSQL", "Express", "React", "Node"),
        "LAMP": ("Linux", "Apache", "MySQL", "PHP"),
        "Django Stack": ("Django", "PostgreSQL", "Python"),
        "Rails Stack": ("Rails", "PostgreSQL", "Ruby"),
        "JAMstack": ("JavaScript", "API", "Markup"),
        "T3 Stack": ("TypeScript", "tRPC", "Tailwind", "Next.js"),
    }
)

# Job role -> skills that qualify for it
ROLE_SKILLS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "Frontend Developer": ("JavaScript", "TypeScript", "HTML", "CSS", "React", "Vue", "Angular"),
        "Backend Developer": ("Python", "Java", "Go", "Node.js", "Ruby", "PHP", "C#"),
        "Full Stack Developer": ("JavaScript", "TypeScript", "Python", "React", "Node.js", "Express"),
        "Mobile Developer": ("Swift", "Kotlin", "Java", "Dart", "Flutter", "React Native"),
        "DevOps Engineer": ("Docker", "Kubernetes", "Python", "Go", "Shell", "Terraform"),
        "Data Scientist": ("Python", "R", "SQL", "TensorFlow", "PyTorch", "Jupyter"),
        "ML Engineer": ("Python", "TensorFlow", "PyTorch", "Scikit-learn", "Keras"),
        "Cloud Engineer": ("AWS", "Azure", "GCP", "Terraform", "Docker", "Kubernetes"),
        "Game Developer": ("C++", "C#", "Unity", "Unreal Engine", "Godot"),
        "Systems Programmer": ("C", "C++", "Rust", "Go", "Assembly"),
    }
)

# Quality keyword sets
TESTING_KEYWORDS = ("test", "spec", "jest", "pytest", "cypress", "vitest", "mocha", "unit")
AUTOMATION_KEYWORDS = (
    "github-actions",
    "workflow",
    "ci",
    "pipeline",
    "continuous",
    "deployment",
    "travis",
    "circleci",
    "azure-pipelines",
    "gitlab-ci",
)
DOCUMENTATION_KEYWORDS = ("docs", "documentation", "wiki", "guide", "handbook", "storybook", "readme")
