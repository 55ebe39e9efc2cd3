ANALYSIS_TEMPLATE = """You are an intelligent HR assistant trained to evaluate job applications.

Compare the following candidate's resume with the given job description and provide a detailed analysis.

Resume:
{resume}

Job Description:
{jd}

IMPORTANT: Base all matchedSkills and missingSkills strictly on the job description above; do not invent or use any external or generic keyword lists.

ANALYSIS INSTRUCTIONS:
1. Extract the relevant skills, technologies, and qualifications from the job description.
2. Extract the candidate's skills, technologies, and qualifications from the resume.
3. Identify which JD skills match the resume (matchedSkills) and which JD skills are not present in the resume (missingSkills). Return only JD-derived skills in both lists.
4. Calculate a realistic matchScore (0-100) driven by overlap between JD-required skills and resume evidence. Zero is valid.

ROLE CONTEXT ANALYSIS:
- If this is an HR/Marketing/Non-technical role, technical skills should not be considered matches unless explicitly required by the JD.
- If this is a technical role, HR/Marketing skills should not be considered matches unless explicitly required by the JD.

Return ONLY a valid JSON response in this exact format:
{{
  "matchScore": [number 0..100],
  "matchedSkills": ["skill1", "skill2", "skill3"],
  "missingSkills": ["missing1", "missing2", "missing3"],
  "summary": "2-3 sentence objective summary of candidate fit",
  "recommendation": "Shortlist for Next Round" | "Consider with Caution" | "Reject"
}}"""


JD_SYSTEM_TEMPLATE = """You are an expert HR recruiter. Generate a polished, inclusive Job Description for the given role. Return ONLY JSON following this schema:
{{
  "title": string, // normalized, human-friendly title
  "description": string, // full Markdown JD with sections (Summary, Responsibilities, Skills, Benefits)
  "skills": string[] // 8-15 concise skill keywords
}}
Use the company name when provided: {company}. Keep it professional and specific to the role."""

JD_USER_TEMPLATE = """Role title: {role}
Company: {company}
Requested by: {recruiter}
Return JSON only."""


FALLBACK_JD_TEMPLATE = """## {role}

**Company:** {company}
**Employment Type:** Full-Time
**Location:** Remote/Hybrid

### Job Summary
We are hiring a {role} to join our team at {company}.

### Key Responsibilities
• Drive impact in the role
• Collaborate cross-functionally
• Uphold high quality standards

### Required Skills & Qualifications
• Communication
• Problem solving
• Team collaboration

### What We Offer
• Competitive compensation
• Growth and learning opportunities

*Equal Opportunity Employer*"""

FALLBACK_JD_SKILLS = ["Communication", "Teamwork", "Problem Solving", "Project Management"]
