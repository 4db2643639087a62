import pytest
from pathlib import Path

from devfile_schema.spec import example_devfile

SAMPLE_DEVFILE = """\
apiVersion: 1.0.0
metadata:
  generateName: java-mysql-
projects:
  - name: petclinic
    source:
      type: git
      location: https://github.com/spring-projects/spring-petclinic.git
components:
  - type: chePlugin
    id: redhat/java/latest
  - type: dockerimage
    alias: maven
    image: quay.io/eclipse/che-java8-maven:nightly
    memoryLimit: 768Mi
    mountSources: true
    env:
      - name: MAVEN_OPTS
        value: -Xmx200m
    volumes:
      - name: m2
        containerPath: /home/user/.m2
    endpoints:
      - name: spring-boot
        port: 8080
        attributes:
          public: "true"
          protocol: http
  - type: kubernetes
    alias: mysql
    reference: deploy_k8s.yaml
    selector:
      app.kubernetes.io/component: database
commands:
  - name: maven build
    actions:
      - type: exec
        component: maven
        command: mvn clean install
        workdir: /projects/petclinic
"""


@pytest.fixture
def devfile_text():
    return SAMPLE_DEVFILE


@pytest.fixture
def devfile_path(tmp_path) -> Path:
    """Writes the sample devfile into a temp dir."""
    path = tmp_path / "devfile.yaml"
    path.write_text(SAMPLE_DEVFILE, encoding="utf-8")
    return path


@pytest.fixture
def example():
    return example_devfile()
