"""
Skill alias table and canonicalization.

Maps every known surface form (lower-case) of a skill to one canonical
display name. The feature extractor records canonical names and the
scoring engine canonicalizes job requirements through the same table, so
both sides always compare identical strings.

The table is built once at import and exposed read-only; concurrent
readers need no locking.
"""

import re
from types import MappingProxyType
from typing import Dict, Tuple

_ALIASES: Dict[str, str] = {
    # JavaScript family
    "javascript": "JavaScript", "js": "JavaScript", "ecmascript": "JavaScript",
    "es6": "JavaScript", "es2015": "JavaScript", "es2020": "JavaScript",
    "vanilla js": "JavaScript", "vanilla javascript": "JavaScript",
    "typescript": "TypeScript", "ts": "TypeScript",

    # React ecosystem
    "react": "React", "reactjs": "React", "react.js": "React", "react js": "React",
    "redux": "Redux", "react-redux": "Redux", "redux toolkit": "Redux", "rtk": "Redux",
    "next.js": "Next.js", "nextjs": "Next.js", "next": "Next.js", "next js": "Next.js",

    # Vue / Angular / other frontend
    "vue": "Vue", "vuejs": "Vue", "vue.js": "Vue", "vue js": "Vue",
    "nuxt.js": "Nuxt.js", "nuxtjs": "Nuxt.js", "nuxt": "Nuxt.js",
    "angular": "Angular", "angularjs": "Angular", "angular.js": "Angular",
    "angular js": "Angular",
    "svelte": "Svelte", "sveltekit": "Svelte",
    "gatsby": "Gatsby", "gatsbyjs": "Gatsby",
    "remix": "Remix",
    "astro": "Astro",
    "solid.js": "SolidJS", "solidjs": "SolidJS",

    # CSS / styling
    "tailwind": "Tailwind CSS", "tailwindcss": "Tailwind CSS",
    "tailwind css": "Tailwind CSS", "tailwind-css": "Tailwind CSS",
    "bootstrap": "Bootstrap",
    "material ui": "Material UI", "mui": "Material UI", "material-ui": "Material UI",
    "chakra ui": "Chakra UI", "chakra": "Chakra UI",
    "ant design": "Ant Design", "antd": "Ant Design",
    "styled-components": "Styled Components", "styled components": "Styled Components",
    "css": "CSS", "css3": "CSS",
    "sass": "SASS", "scss": "SASS",
    "less": "LESS",
    "html": "HTML", "html5": "HTML",

    # Build tools
    "webpack": "Webpack",
    "vite": "Vite", "vitejs": "Vite",
    "rollup": "Rollup",
    "parcel": "Parcel",
    "esbuild": "esbuild",
    "turbopack": "Turbopack",

    # Testing
    "jest": "Jest",
    "vitest": "Vitest",
    "mocha": "Mocha",
    "chai": "Chai",
    "cypress": "Cypress",
    "playwright": "Playwright",
    "puppeteer": "Puppeteer",
    "testing library": "Testing Library", "react testing library": "Testing Library",
    "enzyme": "Enzyme",
    "selenium": "Selenium", "selenium webdriver": "Selenium",
    "pytest": "pytest",
    "junit": "JUnit",
    "api testing": "API Testing", "api test": "API Testing",

    # Node.js / backend JS
    "node.js": "Node.js", "nodejs": "Node.js", "node": "Node.js", "node js": "Node.js",
    "express": "Express", "express.js": "Express", "expressjs": "Express",
    "express js": "Express",
    "fastify": "Fastify",
    "nestjs": "NestJS", "nest.js": "NestJS", "nest": "NestJS",
    "koa": "Koa", "koa.js": "Koa",
    "hapi": "Hapi", "hapijs": "Hapi",

    # Python
    "python": "Python", "python3": "Python", "py": "Python",
    "django": "Django",
    "flask": "Flask",
    "fastapi": "FastAPI", "fast api": "FastAPI",
    "sqlalchemy": "SQLAlchemy",
    "celery": "Celery",

    # Java / JVM
    "java": "Java",
    "spring": "Spring", "spring framework": "Spring",
    "spring boot": "Spring Boot", "springboot": "Spring Boot",
    "hibernate": "Hibernate",
    "kotlin": "Kotlin",
    "scala": "Scala",

    # .NET
    ".net": ".NET", "dotnet": ".NET", "dot net": ".NET",
    "asp.net": "ASP.NET", "aspnet": "ASP.NET",
    "asp.net core": "ASP.NET Core", "aspnet core": "ASP.NET Core",
    "c#": "C#", "csharp": "C#", "c sharp": "C#",

    # Other languages
    "c++": "C++", "cpp": "C++",
    "c": "C",
    "go": "Go", "golang": "Go",
    "rust": "Rust",
    "ruby": "Ruby",
    "php": "PHP",
    "swift": "Swift",
    "objective-c": "Objective-C", "objc": "Objective-C",
    "r": "R",
    "matlab": "MATLAB",
    "perl": "Perl",
    "lua": "Lua",
    "dart": "Dart",
    "elixir": "Elixir",
    "haskell": "Haskell",
    "shell": "Shell", "bash": "Shell", "zsh": "Shell", "sh": "Shell",
    "shell scripting": "Shell",
    "powershell": "PowerShell",

    # Ruby / PHP frameworks
    "rails": "Ruby on Rails", "ruby on rails": "Ruby on Rails",
    "laravel": "Laravel",
    "symfony": "Symfony",

    # Databases
    "postgresql": "PostgreSQL", "postgres": "PostgreSQL", "pg": "PostgreSQL",
    "mysql": "MySQL",
    "mariadb": "MariaDB",
    "sqlite": "SQLite",
    "sql": "SQL", "structured query language": "SQL",
    "nosql": "NoSQL", "no-sql": "NoSQL",
    "mongodb": "MongoDB", "mongo": "MongoDB", "mongoose": "MongoDB",
    "dynamodb": "DynamoDB", "dynamo db": "DynamoDB", "dynamo": "DynamoDB",
    "cassandra": "Cassandra",
    "couchdb": "CouchDB",
    "redis": "Redis",
    "memcached": "Memcached",
    "elasticsearch": "Elasticsearch", "elastic search": "Elasticsearch",
    "elastic": "Elasticsearch",
    "opensearch": "OpenSearch",
    "neo4j": "Neo4j",
    "influxdb": "InfluxDB",
    "sql server": "SQL Server", "mssql": "SQL Server",
    "microsoft sql server": "SQL Server",
    "oracle": "Oracle", "oracle db": "Oracle",

    # ORMs
    "prisma": "Prisma",
    "sequelize": "Sequelize",
    "typeorm": "TypeORM",
    "knex": "Knex",
    "drizzle": "Drizzle",

    # APIs / protocols / architecture
    "graphql": "GraphQL", "graph ql": "GraphQL",
    "rest": "REST", "restful": "REST", "rest api": "REST", "rest apis": "REST",
    "restful api": "REST", "restful apis": "REST",
    "restful services": "REST", "restful web services": "REST",
    "rest services": "REST", "rest api development": "REST",
    "grpc": "gRPC", "g-rpc": "gRPC",
    "websocket": "WebSocket", "websockets": "WebSocket", "socket.io": "WebSocket",
    "web socket": "WebSocket",
    "microservices": "Microservices", "micro services": "Microservices",
    "micro-services": "Microservices", "microservice": "Microservices",
    "microservice architecture": "Microservices",
    "serverless": "Serverless",
    "lambda": "AWS Lambda", "aws lambda": "AWS Lambda",
    "api design": "API Design", "api development": "API Design",
    "rest api design": "API Design",

    # Cloud providers
    "aws": "AWS", "amazon web services": "AWS", "amazon aws": "AWS",
    "azure": "Azure", "microsoft azure": "Azure",
    "gcp": "GCP", "google cloud": "GCP", "google cloud platform": "GCP",
    "cloud native": "Cloud Native", "cloud-native": "Cloud Native",

    # DevOps / infrastructure
    "docker": "Docker", "containerization": "Docker", "containers": "Docker",
    "kubernetes": "Kubernetes", "k8s": "Kubernetes", "kube": "Kubernetes",
    "helm": "Helm",
    "terraform": "Terraform",
    "pulumi": "Pulumi",
    "ansible": "Ansible",
    "chef": "Chef",
    "puppet": "Puppet",
    "vagrant": "Vagrant",
    "ci/cd": "CI/CD", "cicd": "CI/CD", "ci cd": "CI/CD",
    "continuous integration": "CI/CD", "continuous deployment": "CI/CD",
    "continuous delivery": "CI/CD",
    "ci/cd pipeline": "CI/CD", "ci/cd pipelines": "CI/CD",
    "jenkins": "Jenkins",
    "github actions": "GitHub Actions",
    "gitlab ci": "GitLab CI", "gitlab-ci": "GitLab CI",
    "circleci": "CircleCI", "circle ci": "CircleCI",
    "travis ci": "Travis CI", "travis": "Travis CI",
    "argo cd": "Argo CD", "argocd": "Argo CD",
    "nginx": "Nginx",
    "apache": "Apache",
    "linux": "Linux", "ubuntu": "Linux", "centos": "Linux", "debian": "Linux",
    "redhat": "Linux", "rhel": "Linux",
    "cloudflare": "Cloudflare",
    "vercel": "Vercel",
    "netlify": "Netlify",
    "heroku": "Heroku",
    "digitalocean": "DigitalOcean",

    # Data / ML
    "machine learning": "Machine Learning", "ml": "Machine Learning",
    "deep learning": "Deep Learning", "dl": "Deep Learning",
    "neural networks": "Neural Networks", "neural network": "Neural Networks",
    "tensorflow": "TensorFlow", "tf": "TensorFlow",
    "pytorch": "PyTorch", "torch": "PyTorch",
    "keras": "Keras",
    "scikit-learn": "Scikit-Learn", "sklearn": "Scikit-Learn",
    "scikit learn": "Scikit-Learn",
    "pandas": "Pandas",
    "numpy": "NumPy",
    "scipy": "SciPy",
    "matplotlib": "Matplotlib",
    "seaborn": "Seaborn",
    "nlp": "NLP", "natural language processing": "NLP",
    "computer vision": "Computer Vision", "cv": "Computer Vision",
    "opencv": "OpenCV",
    "hugging face": "Hugging Face", "huggingface": "Hugging Face",
    "transformers": "Transformers",
    "langchain": "LangChain",
    "spark": "Apache Spark", "apache spark": "Apache Spark", "pyspark": "Apache Spark",
    "hadoop": "Hadoop",
    "airflow": "Airflow", "apache airflow": "Airflow",
    "kafka": "Kafka", "apache kafka": "Kafka",
    "flink": "Flink",
    "tableau": "Tableau",
    "power bi": "Power BI", "powerbi": "Power BI",
    "looker": "Looker",
    "metabase": "Metabase",
    "etl": "ETL", "data pipeline": "ETL", "data pipelines": "ETL",
    "data warehouse": "Data Warehouse", "data warehousing": "Data Warehouse",
    "snowflake": "Snowflake",
    "databricks": "Databricks",
    "bigquery": "BigQuery", "big query": "BigQuery",
    "mlops": "MLOps", "ml ops": "MLOps", "ml engineering": "MLOps",

    # Mobile
    "react native": "React Native", "react-native": "React Native",
    "reactnative": "React Native",
    "flutter": "Flutter",
    "ionic": "Ionic",
    "xamarin": "Xamarin",
    "android": "Android",
    "ios": "iOS",
    "swiftui": "SwiftUI",
    "jetpack compose": "Jetpack Compose",

    # Tools / version control
    "git": "Git",
    "github": "GitHub",
    "gitlab": "GitLab",
    "bitbucket": "Bitbucket",
    "jira": "JIRA",
    "confluence": "Confluence",
    "trello": "Trello",
    "asana": "Asana",
    "figma": "Figma",
    "sketch": "Sketch",
    "adobe xd": "Adobe XD",

    # Practices / methodology
    "agile": "Agile", "agile methodology": "Agile",
    "scrum": "Scrum", "scrum master": "Scrum",
    "kanban": "Kanban",
    "tdd": "TDD", "test driven development": "TDD",
    "test-driven development": "TDD",
    "bdd": "BDD", "behavior driven development": "BDD",
    "design patterns": "Design Patterns",
    "solid principles": "SOLID Principles", "solid": "SOLID Principles",
    "clean architecture": "Clean Architecture",
    "system design": "System Design",
    "ddd": "DDD", "domain driven design": "DDD", "domain-driven design": "DDD",
    "event-driven architecture": "Event-Driven Architecture",
    "event driven architecture": "Event-Driven Architecture",
    "event driven": "Event-Driven Architecture",
    "full stack": "Full-Stack", "full-stack": "Full-Stack", "fullstack": "Full-Stack",

    # Auth / security
    "oauth": "OAuth", "oauth2": "OAuth", "oauth 2.0": "OAuth",
    "jwt": "JWT", "json web token": "JWT", "json web tokens": "JWT",
    "openid": "OpenID", "openid connect": "OpenID", "oidc": "OpenID",
    "saml": "SAML",
    "keycloak": "Keycloak",
    "iam": "IAM", "identity and access management": "IAM",
    "identity management": "IAM",
    "rbac": "RBAC", "role based access control": "RBAC",
    "role-based access control": "RBAC",
    "owasp": "OWASP",
    "penetration testing": "Penetration Testing", "pen testing": "Penetration Testing",
    "pentest": "Penetration Testing", "pentesting": "Penetration Testing",
    "cybersecurity": "Cybersecurity", "cyber security": "Cybersecurity",
    "information security": "Cybersecurity", "infosec": "Cybersecurity",
    "encryption": "Encryption",
    "ssl": "SSL/TLS", "tls": "SSL/TLS", "ssl/tls": "SSL/TLS", "https": "SSL/TLS",
    "firewall": "Firewall",
    "vpn": "VPN",
    "siem": "SIEM",

    # Monitoring / observability
    "monitoring": "Monitoring",
    "observability": "Observability",
    "prometheus": "Prometheus",
    "grafana": "Grafana",
    "datadog": "Datadog",
    "new relic": "New Relic", "newrelic": "New Relic",
    "sentry": "Sentry",
    "elk stack": "ELK Stack", "elk": "ELK Stack",
    "opentelemetry": "OpenTelemetry", "otel": "OpenTelemetry",

    # Misc
    "blockchain": "Blockchain",
    "solidity": "Solidity",
    "web3": "Web3",
    "firebase": "Firebase",
    "supabase": "Supabase",
    "storybook": "Storybook",

    # Product / business
    "user research": "User Research",
    "roadmapping": "Roadmapping", "product roadmap": "Roadmapping",
    "roadmap": "Roadmapping",
    "excel": "Excel", "microsoft excel": "Excel", "ms excel": "Excel",
    "spreadsheet": "Excel", "spreadsheets": "Excel",
    "technical writing": "Technical Writing", "tech writing": "Technical Writing",
    "api documentation": "API Documentation", "api docs": "API Documentation",
    "api doc": "API Documentation",
    "markdown": "Markdown", "md": "Markdown",
}

# Every canonical name is also its own alias, so canonicalize() is idempotent.
for _canonical in set(_ALIASES.values()):
    _ALIASES.setdefault(_canonical.lower(), _canonical)

SKILL_ALIASES = MappingProxyType(_ALIASES)

# Aliases with spaces or punctuation, longest first so "react native" wins over "react".
MULTI_WORD_ALIASES: Tuple[str, ...] = tuple(
    sorted(
        (a for a in SKILL_ALIASES if any(ch in a for ch in " ./-")),
        key=lambda a: (-len(a), a),
    )
)

# Aliases that can appear as a single whitespace-delimited token.
SINGLE_WORD_ALIASES = frozenset(a for a in SKILL_ALIASES if " " not in a and "/" not in a)

_WHITESPACE = re.compile(r"\s+")


def canonicalize(skill: str) -> str:
    """
    Return the canonical display name for a skill.

    Lookup order: exact alias, alias with internal whitespace removed
    ("Type Script"), alias without a trailing "s" ("Dockers"). Unknown
    skills come back title-cased ("data modelling" -> "Data Modelling").
    """
    lower = " ".join(skill.split()).lower()
    if lower in SKILL_ALIASES:
        return SKILL_ALIASES[lower]

    stripped = _WHITESPACE.sub("", lower)
    if stripped != lower and stripped in SKILL_ALIASES:
        return SKILL_ALIASES[stripped]

    if lower.endswith("s") and lower[:-1] in SKILL_ALIASES:
        return SKILL_ALIASES[lower[:-1]]

    return " ".join(w[:1].upper() + w[1:].lower() for w in skill.split())


def aliases_for(canonical: str) -> Tuple[str, ...]:
    """All surface forms that canonicalize to `canonical`."""
    return tuple(sorted(a for a, name in SKILL_ALIASES.items() if name == canonical))
