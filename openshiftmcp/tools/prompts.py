"""MCP Prompts: pod troubleshooting checklist."""

from typing import List, Optional

try:
    from ..mcp_instance import mcp
except ImportError:
    from openshiftmcp.mcp_instance import mcp

# symptom -> extra checks, matched case-insensitively against the symptoms text
SYMPTOM_CHECKS = {
    "pending": [
        "oc get resourcequota -n {ns}",
        "oc get events -n {ns} --field-selector involvedObject.name={pod}",
        "oc get nodes --show-labels",
    ],
    "crashloopbackoff": [
        "oc logs pod/{pod} -n {ns} --previous{container}",
        "oc get pod {pod} -n {ns} -o jsonpath='{{.status.containerStatuses[*].lastState}}'",
    ],
    "imagepullbackoff": [
        "oc get pod {pod} -n {ns} -o jsonpath='{{.spec.containers[*].image}}'",
        "oc get secrets -n {ns} --field-selector type=kubernetes.io/dockerconfigjson",
    ],
    "oomkilled": [
        "oc get pod {pod} -n {ns} -o jsonpath='{{.spec.containers[*].resources}}'",
        "oc adm top pod {pod} -n {ns}",
    ],
}


def troubleshoot_pod_steps(
    pod_name: str,
    namespace: str,
    symptoms: Optional[str] = None,
    container_name: Optional[str] = None,
) -> List[str]:
    """Ordered oc commands for diagnosing one pod."""
    container = f" -c {container_name}" if container_name else ""
    fmt = {"pod": pod_name, "ns": namespace, "container": container}
    steps = [
        "oc get pod {pod} -n {ns} -o wide",
        "oc describe pod {pod} -n {ns}",
        "oc get events -n {ns} --sort-by=.lastTimestamp",
        "oc logs pod/{pod} -n {ns}{container} --tail=100",
    ]
    lowered = (symptoms or "").lower().replace(" ", "")
    for symptom, checks in SYMPTOM_CHECKS.items():
        if symptom in lowered:
            steps.extend(checks)
    return [step.format(**fmt) for step in steps]


@mcp.prompt()
def troubleshoot_pod(
    pod_name: str,
    namespace: str,
    symptoms: Optional[str] = None,
    container_name: Optional[str] = None,
) -> str:
    """Step-by-step checklist for troubleshooting a pod."""
    lines = [
        f"Troubleshoot pod {pod_name} in namespace {namespace}.",
        f"Symptoms: {symptoms or 'not specified, check every area'}",
        f"Container: {container_name or 'all containers'}",
        "",
        "Run these checks in order (oc_get, oc_describe, oc_status and oc_logs cover them),",
        "stop when the cause is clear, and report the evidence for it:",
    ]
    for i, step in enumerate(troubleshoot_pod_steps(pod_name, namespace, symptoms, container_name), 1):
        lines.append(f"{i}. {step}")
    return "\n".join(lines)
