"""
Prompt templates for stance classification and stance reports.

Plain string builders: no I/O, no model calls.
"""

NO_STANCE = "no-stance"
OTHER_STANCE = "other-stance"


def format_stance_options(stances):
    """Join stance names into the quoted options list used by the classifier prompt."""
    return '", "'.join(s.name for s in stances)


def stance_classification_prompt(question_text, stance_options, context=None):
    """
    Instructions for classifying one comment's stance toward a question.

    The comment itself is left as a literal ``{content}`` placeholder to be
    substituted per comment.
    """
    context_block = ""
    if context:
        context_block = f'Background information:\n"""\n{context}\n"""\n\n'

    return f"""Analyze which stance the comment below takes on the issue "{question_text}".
If the comment does not take a clear position, choose "{NO_STANCE}".

{context_block}Comment:
\"\"\"
{{content}}
\"\"\"

Possible stances: "{stance_options}"

Notes:
- "{NO_STANCE}": the comment does not express a clear position on the issue
- "{OTHER_STANCE}": the comment expresses a clear position on the issue, but it matches none of the given options
- Do not try to read implied meaning into the comment; analyze only what is explicitly written

Respond in JSON format:
{{
  "reasoning": "your reasoning",
  "stance": "name of the stance",
  "confidence": <confidence as a number from 0 to 1>
}}"""


def stance_report_prompt(question_text, stance_analysis, stance_names):
    """
    Analytical report prompt for one question.

    Only stances that received at least one comment are listed.
    """
    sections = []
    for stance_id, data in stance_analysis.items():
        if data["count"] <= 0:
            continue
        stance_name = stance_names.get(stance_id, "Unknown")
        comments_text = "\n".join(data["comments"])
        sections.append(
            f"Stance: {stance_name}\n"
            f"Number of comments: {data['count']}\n"
            f"Comments:\n{comments_text}"
        )
    stances_text = "\n\n".join(sections)

    return f"""Read the stances below on the given issue and the opinions behind each of them.
Analyze the tendencies of each stance's opinions, the grounds for their claims, and how the stances relate to one another.
Explain the result so that anyone can follow it, while staying specific and expert enough to be useful.

Issue: {question_text}

{stances_text}

Points to analyze:
- The key arguments of each stance
- Points of conflict and common ground between the stances
- Distinctive opinions and interesting viewpoints

Formatting:
- Use Markdown headings, bullet points and bold text freely to make the report easy to read.
- Keep it concise enough that anyone can grasp it at a glance."""


def project_report_prompt(project_name, project_description, question_analyses):
    """
    Synthesis prompt across every question of a project.

    question_analyses: [{question, stance_analysis, analysis}, ...] in question order.
    """
    parts = []
    for i, item in enumerate(question_analyses, start=1):
        counts = ", ".join(
            f"{stance_id}: {data['count']}"
            for stance_id, data in item["stance_analysis"].items()
        )
        parts.append(
            f"### Issue {i}: {item['question']}\n"
            f"Comment counts by stance: {counts or 'none'}\n\n"
            f"{item['analysis']}"
        )
    analyses_text = "\n\n".join(parts)

    description_block = f"Project description: {project_description}\n" if project_description else ""

    return f"""You are an expert policy analyst. Below are per-issue analyses of public comments collected for a project.
Write an overall report for the project that ties the issues together.

Project name: {project_name}
{description_block}
Per-issue analyses:

{analyses_text}

Points to cover:
- An overview of the public discussion across the whole project
- The main points of agreement and disagreement for each issue
- Connections and tensions between issues
- Notable viewpoints worth the attention of decision makers

Formatting:
- Use Markdown headings, bullet points and bold text freely to make the report easy to read.
- Keep it concise enough that anyone can grasp it at a glance."""
