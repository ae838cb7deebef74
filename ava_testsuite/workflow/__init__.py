from ava_testsuite.workflow.runner import GeckoUser, RpcWorkflowRunner, WorkflowError

__all__ = [
    "GeckoUser",
    "RpcWorkflowRunner",
    "WorkflowError",
]
