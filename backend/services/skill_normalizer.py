"""Skill canonicalization: alias resolution + parent/child partial credit.

"ReactJS", "react.js" and "React" all resolve to "React". Unknown skills are
kept as typed (trimmed) so nothing a candidate lists is ever discarded.
"""

# ---------------------------------------------------------------------------
# Lowercase alias -> canonical display name
# ---------------------------------------------------------------------------
SKILL_ALIASES: dict[str, str] = {
    # JavaScript ecosystem
    "js": "JavaScript",
    "javascript": "JavaScript",
    "ecmascript": "JavaScript",
    "es6": "JavaScript",
    "typescript": "TypeScript",
    "ts": "TypeScript",
    "node": "Node.js",
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "node js": "Node.js",
    "react": "React",
    "reactjs": "React",
    "react.js": "React",
    "react js": "React",
    "vue": "Vue.js",
    "vuejs": "Vue.js",
    "vue.js": "Vue.js",
    "vue 3": "Vue.js",
    "angular": "Angular",
    "angularjs": "Angular",
    "angular.js": "Angular",
    "nextjs": "Next.js",
    "next.js": "Next.js",
    "next js": "Next.js",
    "nuxt": "Nuxt.js",
    "nuxtjs": "Nuxt.js",
    "nuxt.js": "Nuxt.js",
    "remix": "Remix",
    "gatsby": "Gatsby",
    "gatsbyjs": "Gatsby",
    "express": "Express.js",
    "expressjs": "Express.js",
    "express.js": "Express.js",
    "nestjs": "NestJS",
    "nest.js": "NestJS",
    "svelte": "Svelte",
    "sveltekit": "SvelteKit",
    "jquery": "jQuery",
    "redux": "Redux",
    "webpack": "Webpack",
    "vite": "Vite",
    # Python ecosystem
    "python": "Python",
    "python3": "Python",
    "python 3": "Python",
    "py": "Python",
    "django": "Django",
    "flask": "Flask",
    "fastapi": "FastAPI",
    "fast api": "FastAPI",
    "pandas": "Pandas",
    "numpy": "NumPy",
    "scipy": "SciPy",
    "pytorch": "PyTorch",
    "torch": "PyTorch",
    "tensorflow": "TensorFlow",
    "tf": "TensorFlow",
    "scikit-learn": "Scikit-learn",
    "sklearn": "Scikit-learn",
    "scikit learn": "Scikit-learn",
    "keras": "Keras",
    # Java / JVM
    "java": "Java",
    "spring": "Spring",
    "spring boot": "Spring Boot",
    "springboot": "Spring Boot",
    "kotlin": "Kotlin",
    "scala": "Scala",
    "gradle": "Gradle",
    "maven": "Maven",
    # Systems languages
    "rust": "Rust",
    "go": "Go",
    "golang": "Go",
    "c++": "C++",
    "cpp": "C++",
    "c": "C",
    "c#": "C#",
    "csharp": "C#",
    ".net": ".NET",
    "dotnet": ".NET",
    ".net core": ".NET",
    "asp.net": "ASP.NET",
    # Ruby / PHP
    "ruby": "Ruby",
    "rails": "Ruby on Rails",
    "ruby on rails": "Ruby on Rails",
    "ror": "Ruby on Rails",
    "php": "PHP",
    "laravel": "Laravel",
    "symfony": "Symfony",
    "wordpress": "WordPress",
    # Mobile
    "react native": "React Native",
    "react-native": "React Native",
    "swift": "Swift",
    "swiftui": "SwiftUI",
    "objective-c": "Objective-C",
    "objc": "Objective-C",
    "ios": "iOS",
    "android": "Android",
    "flutter": "Flutter",
    "dart": "Dart",
    # Databases
    "sql": "SQL",
    "mysql": "MySQL",
    "postgres": "PostgreSQL",
    "postgresql": "PostgreSQL",
    "pg": "PostgreSQL",
    "mongo": "MongoDB",
    "mongodb": "MongoDB",
    "redis": "Redis",
    "elasticsearch": "Elasticsearch",
    "elastic": "Elasticsearch",
    "dynamodb": "DynamoDB",
    "cassandra": "Cassandra",
    "sqlite": "SQLite",
    "mariadb": "MariaDB",
    "mssql": "SQL Server",
    "sql server": "SQL Server",
    # Cloud & DevOps
    "aws": "AWS",
    "amazon web services": "AWS",
    "gcp": "GCP",
    "google cloud": "GCP",
    "google cloud platform": "GCP",
    "azure": "Azure",
    "microsoft azure": "Azure",
    "docker": "Docker",
    "kubernetes": "Kubernetes",
    "k8s": "Kubernetes",
    "terraform": "Terraform",
    "ansible": "Ansible",
    "jenkins": "Jenkins",
    "github actions": "GitHub Actions",
    "gitlab ci": "GitLab CI",
    "circleci": "CircleCI",
    "ci/cd": "CI/CD",
    "cicd": "CI/CD",
    "nginx": "Nginx",
    "linux": "Linux",
    "bash": "Bash",
    "prometheus": "Prometheus",
    "grafana": "Grafana",
    "cloudformation": "CloudFormation",
    "aws cloudformation": "CloudFormation",
    "lambda": "AWS Lambda",
    "aws lambda": "AWS Lambda",
    # Data & ML
    "machine learning": "Machine Learning",
    "ml": "Machine Learning",
    "deep learning": "Deep Learning",
    "artificial intelligence": "AI",
    "ai": "AI",
    "nlp": "NLP",
    "natural language processing": "NLP",
    "computer vision": "Computer Vision",
    "data science": "Data Science",
    "spark": "Apache Spark",
    "apache spark": "Apache Spark",
    "kafka": "Apache Kafka",
    "apache kafka": "Apache Kafka",
    "airflow": "Apache Airflow",
    "apache airflow": "Apache Airflow",
    "tableau": "Tableau",
    "power bi": "Power BI",
    "powerbi": "Power BI",
    "dbt": "dbt",
    "snowflake": "Snowflake",
    "bigquery": "BigQuery",
    # Frontend / CSS
    "html": "HTML",
    "html5": "HTML",
    "css": "CSS",
    "css3": "CSS",
    "sass": "Sass",
    "scss": "Sass",
    "tailwind": "Tailwind CSS",
    "tailwindcss": "Tailwind CSS",
    "bootstrap": "Bootstrap",
    # Testing
    "jest": "Jest",
    "cypress": "Cypress",
    "playwright": "Playwright",
    "selenium": "Selenium",
    "pytest": "pytest",
    "junit": "JUnit",
    # APIs & protocols
    "rest": "REST",
    "restful": "REST",
    "rest api": "REST",
    "graphql": "GraphQL",
    "grpc": "gRPC",
    "websocket": "WebSocket",
    "websockets": "WebSocket",
    # Version control & tooling
    "git": "Git",
    "github": "GitHub",
    "gitlab": "GitLab",
    "jira": "Jira",
    "figma": "Figma",
    # Methodologies
    "agile": "Agile",
    "scrum": "Scrum",
    "kanban": "Kanban",
    # Hospitality & food service
    "dishwasher": "Dishwashing",
    "dishwashing": "Dishwashing",
    "line cook": "Line Cook",
    "prep cook": "Prep Cook",
    "server": "Server",
    "waiter": "Server",
    "waitress": "Server",
    "bartender": "Bartender",
    "barista": "Barista",
    "food safety": "Food Safety",
    "servsafe": "Food Safety",
    "pos": "POS Systems",
    "cashier": "Cashier",
    # Trades
    "electrician": "Electrical",
    "electrical": "Electrical",
    "plumber": "Plumbing",
    "plumbing": "Plumbing",
    "welder": "Welding",
    "welding": "Welding",
    "hvac": "HVAC",
    "forklift": "Forklift Operation",
    "forklift certified": "Forklift Operation",
    # Healthcare
    "cna": "Certified Nursing Assistant",
    "certified nursing assistant": "Certified Nursing Assistant",
    "cpr": "CPR Certified",
    "emr": "Electronic Medical Records",
    "hipaa": "HIPAA Compliance",
    # Retail, transport, other
    "customer service": "Customer Service",
    "customer support": "Customer Service",
    "data entry": "Data Entry",
    "cdl": "CDL",
    "truck driver": "Truck Driver",
    "janitor": "Janitorial",
    "janitorial": "Janitorial",
}

# ---------------------------------------------------------------------------
# Parent skill -> child skills. Knowing the parent grants partial credit
# toward each child (a React developer can partly match a Next.js job).
# Directed: a child does not imply its parent.
# ---------------------------------------------------------------------------
SKILL_PARENTS: dict[str, list[str]] = {
    "React": ["Next.js", "Remix", "Gatsby", "React Native"],
    "JavaScript": ["TypeScript", "Node.js", "React", "Vue.js", "Angular", "Next.js"],
    "TypeScript": ["JavaScript"],
    "Python": ["Django", "Flask", "FastAPI", "NumPy", "Pandas", "PyTorch", "TensorFlow", "Scikit-learn"],
    "Node.js": ["Express.js", "NestJS"],
    "SQL": ["PostgreSQL", "MySQL", "SQLite", "SQL Server", "MariaDB"],
    "AWS": ["CloudFormation", "AWS Lambda"],
    "Docker": ["Kubernetes"],
    "Java": ["Spring", "Spring Boot"],
    "Ruby": ["Ruby on Rails"],
    "PHP": ["Laravel", "Symfony"],
}

# Canonical names resolve to themselves so normalization is idempotent
_LOOKUP: dict[str, str] = {
    **{canonical.lower(): canonical for canonical in SKILL_ALIASES.values()},
    **SKILL_ALIASES,
}


def normalize_skill(skill: str) -> str:
    """Return the canonical name for a skill, or the trimmed input if unknown."""
    trimmed = skill.strip()
    if not trimmed:
        return trimmed
    return _LOOKUP.get(trimmed.lower(), trimmed)


def normalize_skills(skills: list[str]) -> list[str]:
    """Normalize each skill and deduplicate case-insensitively.

    First-seen order and first-seen casing win, so ["React", "react.js"]
    collapses to ["React"].
    """
    seen: set[str] = set()
    result: list[str] = []
    for skill in skills:
        normalized = normalize_skill(skill)
        if not normalized:
            continue
        key = normalized.lower()
        if key not in seen:
            seen.add(key)
            result.append(normalized)
    return result


def get_related_skills(skill: str) -> list[str]:
    """Child skills the given skill grants partial credit toward."""
    return list(SKILL_PARENTS.get(normalize_skill(skill), []))
