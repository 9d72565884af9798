"""Pipeline pre-deploy hook that gates on the nits report."""

from __future__ import annotations

import json
import os
import tempfile
import zipfile

import boto3


FAILURE_GUIDE_URL = os.environ.get(
    "GUIDE_URL",
    "https://docs.github.com/en/issues/tracking-your-work-with-issues/creating-an-issue",
)
REPORT_PATH = os.environ.get("NITS_REPORT_PATH", "artifacts/nits.json")


def _extract_artifact(job_data: dict, target_path: str) -> dict:
    credentials = job_data["artifactCredentials"]
    session = boto3.Session(
        aws_access_key_id=credentials["accessKeyId"],
        aws_secret_access_key=credentials["secretAccessKey"],
        aws_session_token=credentials["sessionToken"],
        region_name=os.environ.get("AWS_REGION"),
    )
    s3_client = session.client("s3")

    artifact = job_data["inputArtifacts"][0]
    bucket = artifact["location"]["s3Location"]["bucketName"]
    key = artifact["location"]["s3Location"]["objectKey"]

    with tempfile.NamedTemporaryFile(suffix=".zip") as tmp_file:
        s3_client.download_file(bucket, key, tmp_file.name)
        with zipfile.ZipFile(tmp_file.name) as zipped:
            if target_path not in zipped.namelist():
                raise KeyError(f"{target_path} not found in s3://{bucket}/{key}")
            report = json.loads(zipped.read(target_path).decode("utf-8"))
    if not isinstance(report, dict):
        raise ValueError(f"{target_path} does not contain a nits report")
    return report


def _render_match(rule: str, match: dict) -> str:
    if match.get("line") is None:
        return f"[{rule}] Binary file {match.get('path')} matches"
    return f"[{rule}] {match.get('path')}:{match.get('line')}:{match.get('text')}"


def _violations(report: dict, limit: int = 10) -> list[str]:
    highlights = []
    for result in report.get("results", []):
        if not result.get("violated"):
            continue
        for match in result.get("matches", []):
            highlights.append(_render_match(result.get("rule"), match))
    return highlights[:limit]


def _counts(report: dict) -> dict:
    return {result.get("rule"): result.get("count", 0) for result in report.get("results", [])}


def handler(event, _context):
    job = event["CodePipeline.job"]
    job_id = job["id"]
    data = job["data"]

    client = boto3.client("codepipeline")

    try:
        report = _extract_artifact(data, REPORT_PATH)
    except Exception as exc:  # pylint: disable=broad-except
        client.put_job_failure_result(
            jobId=job_id,
            failureDetails={
                "type": "JobFailed",
                "message": f"Failed to read {REPORT_PATH}: {exc}",
            },
        )
        return

    passed = bool(report.get("passed"))
    highlights = _violations(report)
    message_lines = [
        "Repository nits (pre-deploy hook)",
        f"Passed: {passed}",
        f"Matches: {_counts(report)}",
    ]
    if report.get("aborted"):
        message_lines.append("Stopped at first violation; later rules were not run.")
    if highlights:
        message_lines.append("Violations:")
        message_lines.extend(highlights)
    message_lines.append(f"Remediation: {FAILURE_GUIDE_URL}")
    message = "\n".join(message_lines)

    if not passed:
        client.put_job_failure_result(
            jobId=job_id,
            failureDetails={
                "type": "JobFailed",
                "message": message,
            },
        )
        return

    client.put_job_success_result(
        jobId=job_id,
        executionDetails={"summary": json.dumps({"passed": True, "matches": _counts(report)})},
    )
