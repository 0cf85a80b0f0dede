"""
Rule-based generation of executable documents.

A query is lower-cased and checked against an ordered list of topic rules. The
first rule with a keyword contained in the query wins and its document is
returned with the query quoted under the heading. Queries that match nothing
get the fixed fallback document.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

ResponseFn = Callable[[str], str]

FENCE = "```"


def _fence(lang: str, body: str) -> str:
    return FENCE + lang + "\n" + body.strip("\n") + "\n" + FENCE


def _one_line(query: str) -> str:
    # keep the request line from opening a fence or spilling into a new block
    return re.sub(r"\s+", " ", query).strip().replace("`", "'")


@dataclass(frozen=True)
class ResponseTemplate:
    topic: str
    keywords: tuple[str, ...]
    intro: str
    title: str
    body: str
    filename: str

    def matches(self, query_lower: str) -> bool:
        return any(keyword in query_lower for keyword in self.keywords)

    def render(self, query: str) -> str:
        return (
            f"{self.intro}\n\n"
            f"# {self.title}\n\n"
            f"> Request: {_one_line(query)}\n\n"
            f"{self.body.strip()}\n\n"
            f"Save this as a .md file and run: ie execute {self.filename}"
        )


@dataclass(frozen=True)
class ResponseGenerator:
    templates: tuple[ResponseTemplate, ...]
    fallback: str

    def match(self, query: str) -> Optional[ResponseTemplate]:
        query_lower = query.lower()
        for template in self.templates:
            if template.matches(query_lower):
                return template
        return None

    def generate(self, query: str) -> str:
        template = self.match(query)
        if template is None:
            return self.fallback
        return template.render(query)

    def __call__(self, query: str) -> str:
        return self.generate(query)


DEPLOYMENT = ResponseTemplate(
    topic="deployment",
    keywords=("deployment", "deploy"),
    intro="I'll help you create a deployment. Here's an executable document:",
    title="Deploy Application to Kubernetes",
    filename="deployment.md",
    body="\n\n".join([
        "## Prerequisites",
        "You need `kubectl` configured against a running cluster. "
        "Check that the cluster is reachable before you start.",
        _fence("bash", "kubectl cluster-info"),
        "## Step 1: Create Deployment",
        _fence("bash", "kubectl create deployment my-app --image=nginx:latest --replicas=3"),
        "## Step 2: Expose the Deployment",
        _fence("bash", "kubectl expose deployment my-app --port=80 --target-port=80 --type=ClusterIP"),
        "## Step 3: Verify Deployment",
        _fence("bash", "kubectl rollout status deployment/my-app\n"
                       "kubectl get deployments\n"
                       "kubectl get pods -l app=my-app"),
    ]),
)

SERVICE = ResponseTemplate(
    topic="service",
    keywords=("service",),
    intro="Here's how to create a Kubernetes service:",
    title="Create Kubernetes Service",
    filename="service.md",
    body="\n\n".join([
        "## Step 1: Create Service YAML",
        "The service routes traffic on port 80 to pods labelled `app=my-app`.",
        _fence("bash", """
cat <<EOF > service.yaml
apiVersion: v1
kind: Service
metadata:
  name: my-service
spec:
  selector:
    app: my-app
  ports:
    - protocol: TCP
      port: 80
      targetPort: 8080
  type: ClusterIP
EOF
"""),
        "## Step 2: Apply Service",
        _fence("bash", "kubectl apply -f service.yaml"),
        "## Step 3: Verify Service",
        _fence("bash", "kubectl get services\nkubectl describe service my-service"),
    ]),
)

INGRESS = ResponseTemplate(
    topic="ingress",
    keywords=("ingress",),
    intro="I'll guide you through setting up an ingress controller:",
    title="Setup Ingress Controller",
    filename="ingress.md",
    body="\n\n".join([
        "## Step 1: Install NGINX Ingress Controller",
        _fence("bash", "kubectl apply -f https://raw.githubusercontent.com/kubernetes/"
                       "ingress-nginx/controller-v1.8.1/deploy/static/provider/cloud/deploy.yaml"),
        "## Step 2: Wait for Controller to be Ready",
        _fence("bash", """
kubectl wait --namespace ingress-nginx \\
  --for=condition=ready pod \\
  --selector=app.kubernetes.io/component=controller \\
  --timeout=90s
"""),
        "## Step 3: Create Ingress Resource",
        _fence("bash", """
cat <<EOF > ingress.yaml
apiVersion: networking.k8s.io/v1
kind: Ingress
metadata:
  name: my-ingress
  annotations:
    nginx.ingress.kubernetes.io/rewrite-target: /
spec:
  ingressClassName: nginx
  rules:
  - host: my-app.local
    http:
      paths:
      - path: /
        pathType: Prefix
        backend:
          service:
            name: my-service
            port:
              number: 80
EOF
"""),
        "## Step 4: Apply Ingress",
        _fence("bash", "kubectl apply -f ingress.yaml\nkubectl get ingress my-ingress"),
    ]),
)

POD = ResponseTemplate(
    topic="pod",
    keywords=("pod",),
    intro="Here's an executable document for running and inspecting a pod:",
    title="Work with Pods",
    filename="pod.md",
    body="\n\n".join([
        "## Step 1: Define the Pod",
        _fence("yaml", """
apiVersion: v1
kind: Pod
metadata:
  name: my-pod
  labels:
    app: my-app
spec:
  containers:
    - name: web
      image: nginx:latest
      ports:
        - containerPort: 80
"""),
        "## Step 2: Create the Pod",
        _fence("bash", """
cat <<EOF | kubectl apply -f -
apiVersion: v1
kind: Pod
metadata:
  name: my-pod
  labels:
    app: my-app
spec:
  containers:
    - name: web
      image: nginx:latest
      ports:
        - containerPort: 80
EOF
"""),
        "## Step 3: Inspect the Pod",
        _fence("bash", "kubectl wait --for=condition=ready pod/my-pod --timeout=60s\n"
                       "kubectl get pods -o wide\n"
                       "kubectl describe pod my-pod"),
        "## Step 4: Read the Logs",
        _fence("bash", "kubectl logs my-pod"),
    ]),
)

STORAGE = ResponseTemplate(
    topic="storage",
    keywords=("storage", "volume", "pvc", "pv"),
    intro="Here's how to provision persistent storage for your workload:",
    title="Configure Persistent Storage",
    filename="storage.md",
    body="\n\n".join([
        "## Step 1: Create a PersistentVolume",
        "A hostPath volume is fine for local clusters; use a storage class in production.",
        _fence("bash", """
cat <<EOF > pv.yaml
apiVersion: v1
kind: PersistentVolume
metadata:
  name: my-pv
spec:
  capacity:
    storage: 1Gi
  accessModes:
    - ReadWriteOnce
  hostPath:
    path: /mnt/data
EOF
kubectl apply -f pv.yaml
"""),
        "## Step 2: Claim the Storage with a PersistentVolumeClaim",
        _fence("bash", """
cat <<EOF > pvc.yaml
apiVersion: v1
kind: PersistentVolumeClaim
metadata:
  name: my-pvc
spec:
  accessModes:
    - ReadWriteOnce
  resources:
    requests:
      storage: 1Gi
EOF
kubectl apply -f pvc.yaml
"""),
        "## Step 3: Verify the Binding",
        _fence("bash", "kubectl get pv,pvc"),
    ]),
)

CONFIGURATION = ResponseTemplate(
    topic="configuration",
    keywords=("configmap", "secret"),
    intro="Here's how to keep configuration and secrets out of your images:",
    title="Manage ConfigMaps and Secrets",
    filename="config.md",
    body="\n\n".join([
        "## Step 1: Create a ConfigMap",
        _fence("bash", "kubectl create configmap my-config --from-literal=LOG_LEVEL=info"),
        "## Step 2: Create a Secret",
        _fence("bash", "kubectl create secret generic my-secret --from-literal=API_TOKEN=changeme"),
        "## Step 3: Verify",
        _fence("bash", "kubectl get configmap my-config -o yaml\nkubectl describe secret my-secret"),
    ]),
)

AUTOSCALING = ResponseTemplate(
    topic="autoscaling",
    keywords=("autoscal", "hpa", "scale"),
    intro="Here's how to scale a workload automatically:",
    title="Autoscale a Deployment",
    filename="autoscale.md",
    body="\n\n".join([
        "## Prerequisites",
        "The metrics server must be installed for CPU based autoscaling.",
        _fence("bash", "kubectl top nodes"),
        "## Step 1: Create a HorizontalPodAutoscaler",
        _fence("bash", "kubectl autoscale deployment my-app --cpu-percent=50 --min=1 --max=10"),
        "## Step 2: Verify",
        _fence("bash", "kubectl get hpa"),
    ]),
)

FALLBACK = f"""I can help you with Kubernetes tasks! Here are some things I can assist with:

# Supported Topics

- Deployments and services
- Ingress controllers
- Pods and containers
- Storage and volumes
- ConfigMaps and Secrets
- Autoscaling

## Example Questions

- "How do I create a deployment?"
- "Help me set up a service"
- "I need to configure ingress"

## Quick Start

Use the quick start keys for common tasks: F1 deploys an app, F2 creates a service, F3 sets up ingress.

All responses are executable documents. Save one as a .md file and run it with Innovation Engine:

{_fence("bash", "ie execute my-document.md")}"""

DEFAULT_TEMPLATES = (DEPLOYMENT, SERVICE, INGRESS, POD, STORAGE, CONFIGURATION, AUTOSCALING)


def default_generator() -> ResponseGenerator:
    return ResponseGenerator(templates=DEFAULT_TEMPLATES, fallback=FALLBACK)


_DEFAULT = default_generator()


def generate(query: str) -> str:
    return _DEFAULT.generate(query)
