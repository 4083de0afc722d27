# tools/azure_smoke.py
from __future__ import annotations
from openai import NotFoundError
from cognitive_core.azure_cfg import client, settings
from cognitive_core.llm_bridge import SYSTEM_PROMPT


def main():
    s = settings()
    print("Endpoint :", s.endpoint)
    print("Deploy   :", s.deployment, "(deployment name passed as model=)")
    print("API ver  :", s.api_version)
    cli = client(s)
    try:
        r = cli.chat.completions.create(
            model=s.deployment,
            messages=[{"role": "system", "content": SYSTEM_PROMPT},
                      {"role": "user", "content": "Reply with the single word 'ready'."}],
            temperature=0.0,
            max_tokens=5,
        )
        print("Reply    :", r.choices[0].message.content)
    except NotFoundError:
        print("ERROR 404: Azure cannot find this deployment for this API version.")
        print("Check the deployment name and that api_version matches the portal's target URI.")
        raise


if __name__ == "__main__":
    main()
