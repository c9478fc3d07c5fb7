# tests/test_tools_apps.py
import yaml
from conftest import fail, ok
from openshiftmcp.tools.apps import app_name_from_repo, oc_install_operator, oc_new_app, operator_manifests

REPO = "https://github.com/sclorg/nodejs-ex.git"


def test_app_name_from_repo():
    assert app_name_from_repo(REPO) == "nodejs-ex"
    assert app_name_from_repo("https://gitlab.com/Team/My_Service/") == "my-service"
    assert app_name_from_repo("https://example.com/") == "app"


class TestOcNewApp:
    async def test_existing_namespace_with_route(self, fake_oc):
        fake_oc.respond(["new-app"], ok('--> Creating resources ...\n    service "nodejs-ex" created'))
        fake_oc.respond(["get", "route"], ok("nodejs-ex-route-dev.apps.example.com"))

        result = await oc_new_app(
            git_repo=REPO, namespace="dev", builder_image="nodejs:18", git_ref="main",
            env=["NODE_ENV=production"], labels=["team=web"], strategy="source",
        )

        assert fake_oc.args_list() == [
            ["get", "namespace", "dev"],
            [
                "new-app", f"nodejs:18~{REPO}#main", "--name", "nodejs-ex", "-n", "dev",
                "--strategy=source", "-e", "NODE_ENV=production", "-l", "team=web",
            ],
            ["create", "route", "edge", "nodejs-ex-route", "-n", "dev", "--service", "nodejs-ex"],
            ["get", "route", "nodejs-ex-route", "-n", "dev", "-o", "jsonpath={.spec.host}"],
        ]
        assert result["app_name"] == "nodejs-ex"
        assert result["namespace_created"] is False
        assert result["url"] == "https://nodejs-ex-route-dev.apps.example.com"
        assert result["warnings"] == []

    async def test_creates_missing_namespace(self, fake_oc):
        fake_oc.respond(["get", "namespace"], fail('namespaces "demo" not found'))
        result = await oc_new_app(git_repo=REPO, app_name="web", namespace="demo", expose_route=False)
        assert fake_oc.args_list() == [
            ["get", "namespace", "demo"],
            ["create", "namespace", "demo"],
            ["new-app", REPO, "--name", "web", "-n", "demo"],
        ]
        assert result["namespace_created"] is True
        assert "route" not in result

    async def test_namespace_creation_failure(self, fake_oc):
        fake_oc.respond(["get", "namespace"], fail("not found"))
        fake_oc.respond(["create", "namespace"], fail("forbidden"))
        result = await oc_new_app(git_repo=REPO, namespace="demo")
        assert result["error"] == "Could not create namespace demo: forbidden"
        assert len(fake_oc.calls) == 2

    async def test_route_failure_is_reported(self, fake_oc):
        fake_oc.respond(["create", "route"], fail('routes.route.openshift.io "web-route" already exists'))
        result = await oc_new_app(git_repo=REPO, app_name="web", create_namespace=False, context_dir="app")
        assert fake_oc.args_list()[0] == ["new-app", REPO, "--name", "web", "-n", "default", "--context-dir=app"]
        assert "already exists" in result["route_error"]
        assert "url" not in result

    async def test_new_app_failure(self, fake_oc):
        fake_oc.respond(["new-app"], fail("error: unable to locate any images"))
        result = await oc_new_app(git_repo=REPO, create_namespace=False)
        assert result["error"] == "error: unable to locate any images"
        assert len(fake_oc.calls) == 1

    async def test_unknown_host_warns(self, fake_oc):
        result = await oc_new_app(git_repo="https://code.example.com/app", create_namespace=False, expose_route=False)
        assert result["warnings"]

    async def test_validation(self, fake_oc):
        assert "strategy" in (await oc_new_app(git_repo=REPO, strategy="pipeline"))["error"]
        assert "env" in (await oc_new_app(git_repo=REPO, env=["NOVALUE"]))["error"]
        assert "git_repo" in (await oc_new_app(git_repo="not a url"))["error"]
        assert fake_oc.calls == []


def test_operator_manifests():
    manifests = operator_manifests(
        "etcd", "operators", "stable", "community-operators", "openshift-marketplace", "Manual", "v0.9.4",
    )
    group = yaml.safe_load(manifests["operator_group"])
    subscription = yaml.safe_load(manifests["subscription"])
    assert group["kind"] == "OperatorGroup"
    assert group["spec"]["targetNamespaces"] == ["operators"]
    assert subscription["kind"] == "Subscription"
    assert subscription["spec"] == {
        "channel": "stable",
        "name": "etcd",
        "source": "community-operators",
        "sourceNamespace": "openshift-marketplace",
        "installPlanApproval": "Manual",
        "startingCSV": "etcd.v0.9.4",
    }


class TestOcInstallOperator:
    async def test_install(self, fake_oc):
        fake_oc.respond(["apply"], ok("subscription.operators.coreos.com/etcd-subscription created"))
        result = await oc_install_operator(operator_name="etcd", namespace="operators")

        args = fake_oc.args_list()
        assert args[0] == ["get", "crd", "subscriptions.operators.coreos.com"]
        assert args[1] == ["get", "namespace", "operators"]
        assert args[2] == ["apply", "-n", "operators", "-f", "-"]
        assert args[3] == ["apply", "-n", "operators", "-f", "-"]
        assert yaml.safe_load(fake_oc.calls[2]["input"])["kind"] == "OperatorGroup"
        assert yaml.safe_load(fake_oc.calls[3]["input"])["kind"] == "Subscription"
        assert result["subscription"] == "etcd-subscription"
        assert result["namespace_created"] is False

    async def test_without_olm(self, fake_oc):
        fake_oc.respond(["get", "crd"], fail("NotFound"))
        result = await oc_install_operator(operator_name="etcd")
        assert result["error"] == "Operator Lifecycle Manager (OLM) not found on cluster"
        assert len(fake_oc.calls) == 1

    async def test_existing_operator_group_is_tolerated(self, fake_oc):
        fake_oc.respond(["apply"], fail("operatorgroups already exists"))
        result = await oc_install_operator(operator_name="etcd", create_namespace=False)
        # the subscription apply fails with the same canned error
        assert result["error"] == "operatorgroups already exists"
        assert len(fake_oc.calls) == 3

    async def test_bad_approval(self, fake_oc):
        result = await oc_install_operator(operator_name="etcd", install_plan_approval="Sometimes")
        assert "Automatic" in result["recovery_hint"]
