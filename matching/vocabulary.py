"""
Fixed skill vocabulary used by the fallback analyzer.

Terms are lower-case and matched as plain substrings, so short terms can hit
inside unrelated words ("go" in "mango"). The tables are built once at import
and never modified.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

LANGUAGES_FRAMEWORKS: Tuple[str, ...] = (
    'javascript', 'typescript', 'python', 'java', 'c++', 'c#', 'go',
    'ruby', 'php', 'swift', 'kotlin', 'react', 'angular', 'vue',
    'node.js', 'next.js', 'express', 'django', 'flask', 'fastapi', 'spring',
    'html', 'tensorflow', 'pytorch', 'machine learning',
)

DATABASES: Tuple[str, ...] = (
    'sql', 'mysql', 'postgresql', 'mongodb', 'redis', 'sqlite', 'oracle',
    'dynamodb', 'elasticsearch', 'firebase', 'supabase',
)

CLOUD_TOOLING: Tuple[str, ...] = (
    'aws', 'azure', 'gcp', 'google cloud', 'docker', 'kubernetes',
    'terraform', 'jenkins', 'github', 'ci/cd', 'linux', 'graphql',
    'rest api', 'microservices',
)

HR_TERMS: Tuple[str, ...] = (
    'recruitment', 'recruiting', 'hiring', 'onboarding', 'payroll',
    'employee relations', 'talent acquisition', 'performance management',
    'compensation', 'benefits administration', 'hris', 'human resources',
)

MARKETING_CRM_TERMS: Tuple[str, ...] = (
    'marketing', 'seo', 'social media', 'content strategy', 'brand',
    'campaign', 'google analytics', 'copywriting', 'lead generation',
    'market research', 'crm', 'salesforce', 'hubspot', 'zendesk', 'sales',
)

VOCABULARY: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'languages_frameworks': LANGUAGES_FRAMEWORKS,
    'databases': DATABASES,
    'cloud_tooling': CLOUD_TOOLING,
    'hr_marketing_crm': HR_TERMS + MARKETING_CRM_TERMS,
})

TECHNICAL_TERMS: Tuple[str, ...] = LANGUAGES_FRAMEWORKS + DATABASES + CLOUD_TOOLING
BUSINESS_TERMS: Tuple[str, ...] = VOCABULARY['hr_marketing_crm']

ALL_TERMS: Tuple[str, ...] = tuple(
    term for category in VOCABULARY.values() for term in category
)
